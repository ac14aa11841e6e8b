"""Depth-first walk over a tree-sitter tree, keeping parent links."""

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class NodePath:
    """A node together with the path of its parent (None at the root)."""

    node: Any
    parent: Optional["NodePath"] = None
    depth: int = 0

    @property
    def type(self) -> str:
        return self.node.type

    @property
    def line(self) -> int:
        """1-based line on which the node starts."""
        return self.node.start_point[0] + 1

    def ancestors(self):
        """Yield the enclosing paths, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent


def walk(root: Any, types: Optional[Iterable[str]] = None) -> list[NodePath]:
    """Collect node paths in depth-first pre-order.

    Args:
        root: Root node (usually ``tree.root_node``)
        types: If given, only nodes of these types are emitted; every subtree
            is still explored

    Returns:
        Ordered list of NodePath in document order
    """
    wanted = set(types) if types is not None else None
    result: list[NodePath] = []
    stack = [NodePath(root)]
    while stack:
        path = stack.pop()
        if wanted is None or path.node.type in wanted:
            result.append(path)
        children = path.node.children
        for child in reversed(children):
            stack.append(NodePath(child, path, path.depth + 1))
    return result


def get_parent_node_by_type(path: NodePath, node_type: str) -> Optional[Any]:
    """Return the nearest node of node_type, starting at path itself."""
    if path.node.type == node_type:
        return path.node
    for ancestor in path.ancestors():
        if ancestor.node.type == node_type:
            return ancestor.node
    return None
