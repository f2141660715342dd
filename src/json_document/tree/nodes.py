"""Node dataclass and NodeKind StrEnum: the mutable JSON document model.

A ``Node`` is a tagged union over six kinds. Exactly one payload is live at a
time: a ``bool``, ``int``, ``float`` or ``str`` for scalars, a ``list[Node]``
for arrays, or a ``dict[str, Node]`` for objects. A parent owns its children
outright: there is no sharing between trees and no back-references, so every
copy is a deep copy.

Accessors auto-vivify missing children:

- ``node["name"]`` returns the named member of an OBJECT node, creating an
  empty object member when absent. Any other kind raises
  ``KindMismatchError`` and the node is left untouched.
- ``node[3]`` returns the element of an ARRAY node, growing the array to
  ``index + 1`` with empty-object slots. Any other kind is first converted to
  an empty array, discarding its previous content.

Example::

    doc = Node()
    doc["server"]["port"] = 8080
    doc["server"]["hosts"][1] = "b.example"
    doc["server"]["hosts"].get_array_size()   # 2
"""

from __future__ import annotations

import math
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, TypeVar

from json_document.errors import KindMismatchError

if TYPE_CHECKING:
    from json_document.codec.config import ParserConfig, WriterConfig

__all__ = ["Node", "NodeKind", "Scalar"]

Scalar = bool | int | float | str
Payload = bool | int | float | str | list["Node"] | dict[str, "Node"]

T = TypeVar("T", bool, int, float, str)


class NodeKind(StrEnum):
    """Enumeration of the six node kinds in a document tree.

    StrEnum values are the lowercased member names:
    - BOOL   -> "bool"
    - INT    -> "int"
    - FLOAT  -> "float"
    - STRING -> "string"
    - ARRAY  -> "array"
    - OBJECT -> "object"
    """

    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()

    @property
    def is_scalar(self) -> bool:
        return self not in (NodeKind.ARRAY, NodeKind.OBJECT)


# Requested Python type -> node kinds that can satisfy it.
_READABLE_AS: dict[type, tuple[NodeKind, ...]] = {
    bool: (NodeKind.BOOL,),
    int: (NodeKind.INT,),
    float: (NodeKind.FLOAT, NodeKind.INT),
    str: (NodeKind.STRING,),
}


def _scalar_kind(value: Any) -> NodeKind:
    """Return the node kind for a Python scalar.

    bool MUST be checked before int: bool subclasses int.
    """
    if isinstance(value, bool):
        return NodeKind.BOOL
    if isinstance(value, int):
        return NodeKind.INT
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"non-finite float {value!r} has no JSON representation"
            raise ValueError(msg)
        return NodeKind.FLOAT
    if isinstance(value, str):
        return NodeKind.STRING
    msg = f"Unsupported scalar type: {type(value)!r}"
    raise TypeError(msg)


@dataclass(slots=True)
class Node:
    """One value in a JSON document tree.

    A freshly constructed node is an empty OBJECT. Use ``set_value`` to turn
    it into a scalar and the ``[]`` accessors to grow containers.

    Equality is structural: same kind and equal payloads, recursively.
    """

    _kind: NodeKind = field(default=NodeKind.OBJECT, init=False)
    _payload: Payload = field(default_factory=dict, init=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_python(cls, value: Any) -> Node:
        """Build a tree from native Python values.

        Args:
            value: A ``dict`` with ``str`` keys, a ``list``, or a bool, int,
                float or str scalar. Containers are converted recursively.

        Returns:
            A new Node owning the converted tree.

        Raises:
            TypeError: If ``value`` (or anything nested in it) is None, a
                non-str dict key, or any other unsupported type.
        """
        if isinstance(value, dict):
            members: dict[str, Node] = {}
            for key, child in value.items():
                if not isinstance(key, str):
                    msg = f"Object keys must be str, got {type(key)!r}"
                    raise TypeError(msg)
                members[key] = cls.from_python(child)
            return cls.new_object(members)
        if isinstance(value, list):
            return cls.new_array(cls.from_python(item) for item in value)
        if value is None:
            msg = "null is not supported"
            raise TypeError(msg)
        return cls.new_scalar(value)

    @classmethod
    def new_array(cls, elements: Iterable[Node] = ()) -> Node:
        """Return an ARRAY node that takes ownership of ``elements`` (no copy)."""
        node = cls()
        node._kind = NodeKind.ARRAY
        node._payload = list(elements)
        return node

    @classmethod
    def new_object(cls, members: Mapping[str, Node] | None = None) -> Node:
        """Return an OBJECT node that takes ownership of ``members`` (no copy)."""
        node = cls()
        node._payload = dict(members) if members else {}
        return node

    @classmethod
    def new_scalar(cls, value: Scalar) -> Node:
        node = cls()
        node.set_value(value)
        return node

    def to_python(self) -> Any:
        """Return the tree as native Python values (dict keys in sorted order)."""
        if self._kind is NodeKind.OBJECT:
            return {name: child.to_python() for name, child in self.members()}
        if self._kind is NodeKind.ARRAY:
            return [child.to_python() for child in self.elements()]
        return self._payload

    # ------------------------------------------------------------------
    # Kind and scalar values
    # ------------------------------------------------------------------

    @property
    def kind(self) -> NodeKind:
        return self._kind

    def get_type(self) -> NodeKind:
        """Return the current kind of this node."""
        return self._kind

    def set_value(self, value: Scalar) -> None:
        """Turn this node into a scalar holding ``value``.

        The kind follows the Python type of ``value``. Any previous array or
        object content is discarded.

        Raises:
            TypeError: If ``value`` is not a bool, int, float or str.
            ValueError: If ``value`` is a NaN or infinite float.
        """
        kind = _scalar_kind(value)
        self._kind = kind
        if kind is NodeKind.INT:
            self._payload = int(value)
        elif kind is NodeKind.FLOAT:
            self._payload = float(value)
        elif kind is NodeKind.STRING:
            self._payload = str(value)
        else:
            self._payload = value

    def get_value(self, as_type: type[T]) -> T:
        """Return the scalar payload as ``as_type``.

        INT nodes may be read as ``float``; every other combination must
        match exactly.

        Raises:
            KindMismatchError: If the node's kind cannot be read as ``as_type``.
            TypeError: If ``as_type`` is not bool, int, float or str.
            ValueError: If an INT is read as ``float`` but is too large for one.
        """
        accepted = _READABLE_AS.get(as_type)
        if accepted is None:
            msg = f"Unsupported value type: {as_type!r}"
            raise TypeError(msg)
        if self._kind not in accepted:
            raise KindMismatchError(accepted[0], self._kind, "get_value")
        try:
            return as_type(self._payload)
        except OverflowError:
            msg = "INT value is too large to read as float"
            raise ValueError(msg) from None

    @property
    def value(self) -> Scalar:
        """The native scalar payload of a BOOL, INT, FLOAT or STRING node."""
        if not self._kind.is_scalar:
            raise KindMismatchError("scalar", self._kind, "value")
        return self._payload  # type: ignore[return-value]

    @property
    def scalar_text(self) -> str:
        """Textual form of a scalar: ``true``/``false``, digits, or raw string."""
        if self._kind is NodeKind.BOOL:
            return "true" if self._payload else "false"
        if self._kind is NodeKind.FLOAT:
            return repr(self._payload)
        if self._kind in (NodeKind.INT, NodeKind.STRING):
            return str(self._payload)
        raise KindMismatchError("scalar", self._kind, "scalar_text")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def __getitem__(self, key: str | int) -> Node:
        if isinstance(key, str):
            return self._member(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return self._element(key)
        msg = f"Node keys must be str or int, got {type(key)!r}"
        raise TypeError(msg)

    def __setitem__(self, key: str | int, value: Any) -> None:
        # Build the replacement first so that ``node["x"] = node`` copies the
        # tree as it was before "x" was created.
        if isinstance(value, Node):
            replacement = value.copy()
        else:
            replacement = Node.from_python(value)
        self[key].move_from(replacement)

    def __contains__(self, name: object) -> bool:
        if self._kind is not NodeKind.OBJECT:
            return False
        return name in self._payload  # type: ignore[operator]

    def _member(self, name: str) -> Node:
        if self._kind is not NodeKind.OBJECT:
            operation = f"member access {name!r}"
            raise KindMismatchError(NodeKind.OBJECT, self._kind, operation)
        members: dict[str, Node] = self._payload  # type: ignore[assignment]
        child = members.get(name)
        if child is None:
            child = members[name] = Node()
        return child

    def _element(self, index: int) -> Node:
        if index < 0:
            msg = f"Array index must be >= 0, got {index}"
            raise IndexError(msg)
        if self._kind is not NodeKind.ARRAY:
            self._kind = NodeKind.ARRAY
            self._payload = []
        elements: list[Node] = self._payload  # type: ignore[assignment]
        if index >= len(elements):
            elements.extend(Node() for _ in range(index + 1 - len(elements)))
        return elements[index]

    def get_child_count(self) -> int:
        """Number of object members (0 for any other kind)."""
        if self._kind is not NodeKind.OBJECT:
            return 0
        return len(self._payload)  # type: ignore[arg-type]

    def get_array_size(self) -> int:
        """Number of array elements (0 for any other kind)."""
        if self._kind is not NodeKind.ARRAY:
            return 0
        return len(self._payload)  # type: ignore[arg-type]

    def keys(self) -> list[str]:
        """Object member names in sorted order."""
        if self._kind is not NodeKind.OBJECT:
            return []
        return sorted(self._payload)  # type: ignore[arg-type]

    def members(self) -> Iterator[tuple[str, Node]]:
        """Yield ``(name, child)`` pairs in sorted name order."""
        if self._kind is not NodeKind.OBJECT:
            return
        members: dict[str, Node] = self._payload  # type: ignore[assignment]
        for name in sorted(members):
            yield name, members[name]

    def elements(self) -> Iterator[Node]:
        """Yield array elements in index order."""
        if self._kind is NodeKind.ARRAY:
            yield from self._payload  # type: ignore[misc]

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    def copy(self) -> Node:
        """Return a deep copy of this subtree."""
        clone = Node()
        clone._kind = self._kind
        if self._kind is NodeKind.OBJECT:
            members: dict[str, Node] = self._payload  # type: ignore[assignment]
            clone._payload = {name: child.copy() for name, child in members.items()}
        elif self._kind is NodeKind.ARRAY:
            elements: list[Node] = self._payload  # type: ignore[assignment]
            clone._payload = [child.copy() for child in elements]
        else:
            clone._payload = self._payload
        return clone

    def __copy__(self) -> Node:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Node:
        return self.copy()

    def assign(self, other: Node) -> None:
        """Replace this node's content with a deep copy of ``other``."""
        if other is self:
            return
        self.move_from(other.copy())

    def move_from(self, other: Node) -> None:
        """Take ``other``'s content without copying; ``other`` becomes empty.

        Raises:
            ValueError: If this node lies inside ``other``'s subtree.
        """
        if other is self:
            return
        if other._has_descendant(self):
            msg = "cannot move a node into one of its own descendants"
            raise ValueError(msg)
        self._kind, self._payload = other._kind, other._payload
        other.reset()

    def _has_descendant(self, target: Node) -> bool:
        stack = list(self._children())
        while stack:
            node = stack.pop()
            if node is target:
                return True
            stack.extend(node._children())
        return False

    def _children(self) -> Iterable[Node]:
        if self._kind is NodeKind.OBJECT:
            return self._payload.values()  # type: ignore[union-attr]
        if self._kind is NodeKind.ARRAY:
            return self._payload  # type: ignore[return-value]
        return ()

    def reset(self) -> None:
        """Return this node to an empty OBJECT."""
        self._kind = NodeKind.OBJECT
        self._payload = {}

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(
        self, path: str | os.PathLike[str], config: ParserConfig | None = None
    ) -> None:
        """Replace this node's content with the document stored at ``path``.

        On failure the node is left unchanged.
        """
        from json_document.api import load

        self.move_from(load(path, config=config))

    def save(
        self, path: str | os.PathLike[str], config: WriterConfig | None = None
    ) -> bool:
        """Write this node to ``path``; False if the file cannot be opened."""
        from json_document.api import save

        return save(self, path, config=config)

    def __repr__(self) -> str:
        if self._kind is NodeKind.OBJECT:
            return f"Node(object, keys={self.keys()!r})"
        if self._kind is NodeKind.ARRAY:
            return f"Node(array, size={self.get_array_size()})"
        return f"Node({self._kind}, {self._payload!r})"
