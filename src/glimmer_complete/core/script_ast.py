"""tree-sitter helpers for the JavaScript/TypeScript side of a project."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

_TRANSLATION_FUNCTION = "t"


@dataclass(frozen=True)
class ScriptString:
    """A string literal found in script source; offsets exclude the quotes."""

    value: str
    start_byte: int
    end_byte: int


def parse_script(source_bytes: bytes, language: str) -> Tree:
    parser = get_parser(cast(SupportedLanguage, language))
    return parser.parse(source_bytes)


def _walk(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _string_content(node: Node) -> ScriptString:
    text = _text(node)
    return ScriptString(value=text[1:-1], start_byte=node.start_byte + 1, end_byte=node.end_byte - 1)


def _property_name(node: Node) -> str:
    if node.type == "string":
        return _string_content(node).value
    return _text(node)


def find_pod_module_prefix(source: str) -> str | None:
    """Return the ``podModulePrefix`` string configured in an environment module.

    Both the object-literal form (``podModulePrefix: 'app/pods'``) and the
    assignment form (``ENV.podModulePrefix = 'app/pods'``) are recognised.
    """
    tree = parse_script(source.encode("utf-8"), "javascript")
    for node in _walk(tree.root_node):
        if node.type == "pair":
            key = node.child_by_field_name("key")
            value = node.child_by_field_name("value")
        elif node.type == "assignment_expression":
            left = node.child_by_field_name("left")
            key = left.child_by_field_name("property") if left is not None and left.type == "member_expression" else None
            value = node.child_by_field_name("right")
        else:
            continue
        if key is None or value is None or value.type != "string":
            continue
        if _property_name(key) == "podModulePrefix":
            return _string_content(value).value
    return None


def _is_translation_callee(node: Node | None) -> bool:
    if node is None:
        return False
    if node.type == "identifier":
        return _text(node) == _TRANSLATION_FUNCTION
    if node.type == "member_expression":
        return _property_name_of_member(node) == _TRANSLATION_FUNCTION
    return False


def _property_name_of_member(node: Node) -> str | None:
    prop = node.child_by_field_name("property")
    return _text(prop) if prop is not None else None


def find_translation_argument(source_bytes: bytes, byte_offset: int, language: str) -> ScriptString | None:
    """Return the string at ``byte_offset`` when it is the key argument of a ``t(...)`` call."""
    tree = parse_script(source_bytes, language)
    node = tree.root_node.descendant_for_byte_range(byte_offset, byte_offset)
    if node is not None and node.type != "string":
        node = node.parent
    if node is None or node.type != "string":
        return None

    arguments = node.parent
    if arguments is None or arguments.type != "arguments":
        return None
    named = arguments.named_children
    if not named or named[0].id != node.id:
        return None

    call = arguments.parent
    if call is None or call.type != "call_expression":
        return None
    if not _is_translation_callee(call.child_by_field_name("function")):
        return None
    return _string_content(node)
