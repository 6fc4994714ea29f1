"""Template syntax tree.

Every node kind is a pydantic model carrying a ``type`` tag and an optional
``loc``. Structural children are reachable only through the slots listed in
``CHILD_SLOTS``; traversal code dispatches on the tag instead of inspecting
arbitrary attributes.
"""

from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, Field

from glimmer_complete.models import SourceRange


class Node(BaseModel):
    type: str
    loc: SourceRange | None = None


class PathExpression(Node):
    type: Literal["PathExpression"] = "PathExpression"
    original: str
    parts: list[str] = Field(default_factory=list)
    data: bool = False


class StringLiteral(Node):
    type: Literal["StringLiteral"] = "StringLiteral"
    value: str
    original: str


class NumberLiteral(Node):
    type: Literal["NumberLiteral"] = "NumberLiteral"
    value: float
    original: str


class BooleanLiteral(Node):
    type: Literal["BooleanLiteral"] = "BooleanLiteral"
    value: bool


class NullLiteral(Node):
    type: Literal["NullLiteral"] = "NullLiteral"


class UndefinedLiteral(Node):
    type: Literal["UndefinedLiteral"] = "UndefinedLiteral"


class HashPair(Node):
    type: Literal["HashPair"] = "HashPair"
    key: str
    value: Node


class Hash(Node):
    type: Literal["Hash"] = "Hash"
    pairs: list[HashPair] = Field(default_factory=list)


class SubExpression(Node):
    type: Literal["SubExpression"] = "SubExpression"
    path: Node
    params: list[Node] = Field(default_factory=list)
    hash: Hash = Field(default_factory=Hash)


class MustacheStatement(Node):
    type: Literal["MustacheStatement"] = "MustacheStatement"
    path: Node
    params: list[Node] = Field(default_factory=list)
    hash: Hash = Field(default_factory=Hash)
    trusting: bool = False


class ElementModifierStatement(Node):
    type: Literal["ElementModifierStatement"] = "ElementModifierStatement"
    path: Node
    params: list[Node] = Field(default_factory=list)
    hash: Hash = Field(default_factory=Hash)


class TextNode(Node):
    type: Literal["TextNode"] = "TextNode"
    chars: str


class CommentStatement(Node):
    type: Literal["CommentStatement"] = "CommentStatement"
    value: str


class MustacheCommentStatement(Node):
    type: Literal["MustacheCommentStatement"] = "MustacheCommentStatement"
    value: str


class ConcatStatement(Node):
    type: Literal["ConcatStatement"] = "ConcatStatement"
    parts: list[Node] = Field(default_factory=list)


class AttrNode(Node):
    type: Literal["AttrNode"] = "AttrNode"
    name: str
    value: Node


class Block(Node):
    type: Literal["Block"] = "Block"
    body: list[Node] = Field(default_factory=list)
    block_params: list[str] = Field(default_factory=list)


class BlockStatement(Node):
    type: Literal["BlockStatement"] = "BlockStatement"
    path: Node
    params: list[Node] = Field(default_factory=list)
    hash: Hash = Field(default_factory=Hash)
    program: Block
    inverse: Block | None = None


class ElementNode(Node):
    type: Literal["ElementNode"] = "ElementNode"
    tag: str
    self_closing: bool = False
    attributes: list[AttrNode] = Field(default_factory=list)
    modifiers: list[ElementModifierStatement] = Field(default_factory=list)
    comments: list[MustacheCommentStatement] = Field(default_factory=list)
    block_params: list[str] = Field(default_factory=list)
    children: list[Node] = Field(default_factory=list)


class Template(Node):
    type: Literal["Template"] = "Template"
    body: list[Node] = Field(default_factory=list)
    block_params: list[str] = Field(default_factory=list)


CHILD_SLOTS: dict[str, tuple[str, ...]] = {
    "Template": ("body",),
    "Block": ("body",),
    "ElementNode": ("attributes", "modifiers", "comments", "children"),
    "AttrNode": ("value",),
    "ConcatStatement": ("parts",),
    "MustacheStatement": ("path", "params", "hash"),
    "BlockStatement": ("path", "params", "hash", "program", "inverse"),
    "ElementModifierStatement": ("path", "params", "hash"),
    "SubExpression": ("path", "params", "hash"),
    "Hash": ("pairs",),
    "HashPair": ("value",),
    "PathExpression": (),
    "StringLiteral": (),
    "NumberLiteral": (),
    "BooleanLiteral": (),
    "NullLiteral": (),
    "UndefinedLiteral": (),
    "TextNode": (),
    "CommentStatement": (),
    "MustacheCommentStatement": (),
}


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the structural children of ``node`` in slot order."""
    for slot in CHILD_SLOTS[node.type]:
        value = getattr(node, slot)
        if value is None:
            continue
        if isinstance(value, list):
            yield from value
        else:
            yield value
