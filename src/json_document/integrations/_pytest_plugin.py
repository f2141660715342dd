"""pytest plugin for json-document.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_document import Node, ParserConfig, WriterConfig, dumps, loads


@pytest.fixture(scope="session")
def assert_json_round_trip() -> Any:
    """Fixture that returns a callable write/parse round-trip asserter.

    The fixture is session-scoped because the returned callable is stateless
    (every call builds its own Writer and Parser).

    Usage in tests::

        def test_settings_survive_save(assert_json_round_trip):
            doc = Node.from_python({"name": "demo", "ports": [80, 443]})
            assert_json_round_trip(doc)

    Returns:
        A callable ``_assert(node, writer_config=None, parser_config=None) -> Node``
        that raises ``AssertionError`` when the parsed text differs from
        ``node`` or when writing the parsed tree produces different text.
        On success the parsed tree is returned for further checks.
    """

    def _assert(
        node: Node,
        writer_config: WriterConfig | None = None,
        parser_config: ParserConfig | None = None,
    ) -> Node:
        text = dumps(node, config=writer_config)
        parsed = loads(text, config=parser_config)
        if parsed != node:
            raise AssertionError(
                "document changed after write/parse round trip\n"
                f"  written:  {text!r}\n"
                f"  original: {node.to_python()!r}\n"
                f"  parsed:   {parsed.to_python()!r}"
            )
        rewritten = dumps(parsed, config=writer_config)
        if rewritten != text:
            raise AssertionError(
                "writing the parsed document produced different text\n"
                f"  first:  {text!r}\n"
                f"  second: {rewritten!r}"
            )
        return parsed

    return _assert
