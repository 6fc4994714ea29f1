from collections.abc import Sequence

from glimmer_complete.core.template_ast import Node, iter_children
from glimmer_complete.models import Position, SourceRange


def contains_position(loc: SourceRange, position: Position) -> bool:
    """Return True when ``position`` lies within ``loc``, both ends inclusive."""
    start, end = loc.start, loc.end
    after_start = start.line < position.line or (start.line == position.line and start.column <= position.column)
    before_end = end.line > position.line or (end.line == position.line and end.column >= position.column)
    return after_start and before_end


class AstPath:
    """An ancestor chain from the tree root down to a focus node.

    The node sequence is shared between a path and every path derived from it;
    moving to the parent only moves the cursor.
    """

    __slots__ = ("_nodes", "_index")

    def __init__(self, nodes: Sequence[Node], index: int | None = None) -> None:
        if not nodes:
            raise ValueError("AstPath requires at least one node")
        self._nodes = tuple(nodes)
        self._index = len(self._nodes) - 1 if index is None else index

    @classmethod
    def to_position(cls, tree: Node, position: Position) -> "AstPath | None":
        nodes = _find_focus_path(tree, position, set())
        if nodes:
            return cls(nodes)
        return None

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def index(self) -> int:
        return self._index

    @property
    def node(self) -> Node:
        return self._nodes[self._index]

    @property
    def parent(self) -> Node | None:
        if self._index < 1:
            return None
        return self._nodes[self._index - 1]

    @property
    def parent_path(self) -> "AstPath | None":
        if self._index < 1:
            return None
        path = AstPath.__new__(AstPath)
        path._nodes = self._nodes
        path._index = self._index - 1
        return path

    def __repr__(self) -> str:
        types = " > ".join(node.type for node in self._nodes[: self._index + 1])
        return f"AstPath({types})"


def resolve(tree: Node, position: Position) -> AstPath | None:
    return AstPath.to_position(tree, position)


def _find_focus_path(node: Node, position: Position, seen: set[int]) -> list[Node]:
    seen.add(id(node))

    path: list[Node] = []
    if node.loc is not None:
        if not contains_position(node.loc, position):
            return []
        path.append(node)

    for child in iter_children(node):
        if id(child) in seen:
            continue
        child_path = _find_focus_path(child, position, seen)
        if child_path:
            path.extend(child_path)
            break

    return path
