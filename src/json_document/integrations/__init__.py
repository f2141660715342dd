"""Integrations subpackage for json-document.

Contains adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_json_round_trip`` fixture
"""
