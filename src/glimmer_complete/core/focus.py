from glimmer_complete.core.ast_path import AstPath
from glimmer_complete.core.ports.parser import TemplateParser
from glimmer_complete.core.template_ast import PathExpression, StringLiteral
from glimmer_complete.documents.text_document import TextDocument
from glimmer_complete.models import Position


def insert_placeholder(text: str, offset: int, placeholder: str) -> str:
    return text[:offset] + placeholder + text[offset:]


def template_focus_path(
    document: TextDocument,
    position: Position,
    parser: TemplateParser,
    placeholder: str,
) -> AstPath | None:
    """Parse ``document`` with ``placeholder`` typed at ``position`` and resolve the node under it.

    The placeholder turns half-typed input such as ``{{}}`` or ``{{#}}`` into a
    parseable expression. Nodes before the cursor keep their original
    locations, so ranges taken from them apply to the unmodified document.
    """
    patched = insert_placeholder(document.get_text(), document.offset_at(position), placeholder)
    tree = parser.parse(patched)
    return AstPath.to_position(tree, document.codepoint_position(position))


def text_prefix(path: AstPath, placeholder: str) -> str:
    """Return what the user has typed at the focus, without the placeholder."""
    node = path.node
    if isinstance(node, (PathExpression, StringLiteral)):
        return node.original.replace(placeholder, "")
    return ""
