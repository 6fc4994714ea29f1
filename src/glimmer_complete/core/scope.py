import re
from dataclasses import dataclass

from glimmer_complete.core.ast_path import AstPath
from glimmer_complete.core.template_ast import Block, ElementNode, Node, PathExpression

_LINES = re.compile(r".*?(?:\r\n?|\n|$)")


@dataclass(frozen=True)
class ScopeBinding:
    name: str
    declaring_path: AstPath
    index: int

    @property
    def declaring_node(self) -> Node:
        return self.declaring_path.node


def local_scope(path: AstPath) -> list[ScopeBinding]:
    """Collect block-parameter bindings visible at the focus, nearest first."""
    bindings: list[ScopeBinding] = []
    cursor = path.parent_path
    while cursor is not None:
        node = cursor.node
        if isinstance(node, (ElementNode, Block)):
            for index, name in enumerate(node.block_params):
                bindings.append(ScopeBinding(name=name, declaring_path=cursor, index=index))
        cursor = cursor.parent_path
    return bindings


def _local_path_name(node: Node) -> str | None:
    if not isinstance(node, PathExpression) or not node.parts:
        return None
    head = node.parts[0]
    if head == "this":
        return None
    return head


def is_local_scoped_path_expression(path: AstPath) -> bool:
    name = _local_path_name(path.node)
    if name is None:
        return False
    return any(binding.name == name for binding in local_scope(path))


def component_name_for_path(path: AstPath) -> str | None:
    """Resolve a locally bound path to the tag of the element declaring it.

    Returns None when the path is not locally scoped or when the nearest
    declaration comes from something other than an element.
    """
    if not is_local_scoped_path_expression(path):
        return None
    name = _local_path_name(path.node)
    declaration = next(binding for binding in local_scope(path) if binding.name == name)
    if isinstance(declaration.declaring_node, ElementNode):
        return declaration.declaring_node.tag
    return None


def source_for_node(node: Node, content: str = "") -> str | None:
    if node.loc is None:
        return None

    first_line = node.loc.start.line
    last_line = node.loc.end.line
    lines = _LINES.findall(content)
    if first_line >= len(lines):
        return None

    chunks: list[str] = []
    for current in range(first_line, min(last_line, len(lines) - 1) + 1):
        line = lines[current]
        if current == first_line and current == last_line:
            chunks.append(line[node.loc.start.column : node.loc.end.column])
        elif current == first_line:
            chunks.append(line[node.loc.start.column :])
        elif current == last_line:
            chunks.append(line[: node.loc.end.column])
        else:
            chunks.append(line)
    return "".join(chunks)
