"""Tree subpackage: the mutable document model.

Re-exports the public API for the tree module:
- Node: tagged-union dataclass for one value in a document tree
- NodeKind: StrEnum of the six node kinds (BOOL, INT, FLOAT, STRING, ARRAY, OBJECT)
"""

from json_document.tree.nodes import Node, NodeKind

__all__ = ["Node", "NodeKind"]
