"""Recursive-descent parser for Glimmer templates.

Locations use zero-indexed lines and code-point columns, matching what
``TextDocument`` hands to the resolver.
"""

import bisect
import logging
import re

from glimmer_complete.core.template_ast import (
    AttrNode,
    Block,
    BlockStatement,
    BooleanLiteral,
    CommentStatement,
    ConcatStatement,
    ElementModifierStatement,
    ElementNode,
    Hash,
    HashPair,
    MustacheCommentStatement,
    MustacheStatement,
    Node,
    NullLiteral,
    NumberLiteral,
    PathExpression,
    StringLiteral,
    SubExpression,
    Template,
    TextNode,
    UndefinedLiteral,
)
from glimmer_complete.models import Position, SourceRange

logger = logging.getLogger(__name__)

_VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"}
)

_WS = re.compile(r"\s*")
_NEWLINE = re.compile(r"\r\n?|\n")
_TEXT_END = re.compile(r"\{\{|<(?:[A-Za-z@:/]|!--)")
_TAG_NAME = re.compile(r"[A-Za-z@:][\w\-.:@]*")
_ATTR_NAME = re.compile(r"[^\s\"'<>/={}]+")
_UNQUOTED_VALUE = re.compile(r"[^\s>]+")
_PATH = re.compile(r"[^\s(){}\"'=|~]+")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?![^\s)}~])")
_HASH_KEY = re.compile(r"([^\s(){}\"'=|~]+)=")
_BLOCK_PARAMS = re.compile(r"as\s+\|([^|]*)\|")
_BLOCK_OPEN = re.compile(r"\{\{~?#")
_COMMENT_OPEN = re.compile(r"\{\{~?!(--)?")
_LONG_COMMENT_CLOSE = re.compile(r"--~?\}\}")
_SHORT_COMMENT_CLOSE = re.compile(r"~?\}\}")
_CLOSE_BLOCK = re.compile(r"\{\{~?/\s*([^\s}~]+)\s*~?\}\}")
_ELSE = re.compile(r"\{\{~?\s*else(?=[\s}~])")
_CALL_END = re.compile(r"~?\}\}|\)|as\s+\|")
_MUSTACHE_CLOSE = re.compile(r"~?\}\}")


class TemplateSyntaxError(ValueError):
    def __init__(self, message: str, position: Position) -> None:
        super().__init__(f"{message} (line {position.line}, column {position.column})")
        self.position = position


class GlimmerParser:
    """Parse template source into a ``Template`` tree."""

    def parse(self, text: str) -> Template:
        return _Parser(text).parse()


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self._line_starts = [0] + [m.end() for m in _NEWLINE.finditer(text)]

    # -- location helpers --------------------------------------------------

    def position(self, offset: int) -> Position:
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line=line, column=offset - self._line_starts[line])

    def range(self, start: int, end: int) -> SourceRange:
        return SourceRange(start=self.position(start), end=self.position(end))

    def error(self, message: str, offset: int | None = None) -> TemplateSyntaxError:
        position = self.position(self.pos if offset is None else offset)
        logger.debug("Template syntax error: %s at %s", message, position)
        return TemplateSyntaxError(message, position)

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_ws(self) -> None:
        match = _WS.match(self.text, self.pos)
        assert match is not None
        self.pos = match.end()

    def skip_tilde(self) -> None:
        self.skip_ws()
        if self.startswith("~"):
            self.pos += 1

    def expect(self, token: str) -> None:
        if not self.startswith(token):
            raise self.error(f"Expected {token!r}")
        self.pos += len(token)

    # -- content -----------------------------------------------------------

    def parse(self) -> Template:
        body = self.body()
        if not self.at_end():
            raise self.error("Unexpected closing construct")
        return Template(body=body, loc=self.range(0, len(self.text)))

    def body(self) -> list[Node]:
        nodes: list[Node] = []
        while not self.at_end():
            if (
                self.startswith("</")
                or _CLOSE_BLOCK.match(self.text, self.pos)
                or _ELSE.match(self.text, self.pos)
            ):
                break
            nodes.append(self.statement())
        return nodes

    def statement(self) -> Node:
        if _COMMENT_OPEN.match(self.text, self.pos):
            return self.mustache_comment()
        if _BLOCK_OPEN.match(self.text, self.pos):
            return self.block()
        if self.startswith("{{"):
            return self.mustache()
        if self.startswith("<!--"):
            return self.html_comment()
        if self.startswith("<") and _TAG_NAME.match(self.text, self.pos + 1):
            return self.element()
        return self.text_node()

    def text_node(self) -> TextNode:
        start = self.pos
        match = _TEXT_END.search(self.text, start + 1)
        self.pos = match.start() if match else len(self.text)
        return TextNode(chars=self.text[start : self.pos], loc=self.range(start, self.pos))

    def html_comment(self) -> CommentStatement:
        start = self.pos
        end = self.text.find("-->", start + 4)
        if end < 0:
            raise self.error("Unterminated comment", start)
        self.pos = end + 3
        return CommentStatement(value=self.text[start + 4 : end], loc=self.range(start, self.pos))

    def mustache_comment(self) -> MustacheCommentStatement:
        start = self.pos
        opener = _COMMENT_OPEN.match(self.text, self.pos)
        assert opener is not None
        closer = _LONG_COMMENT_CLOSE if opener.group(1) else _SHORT_COMMENT_CLOSE
        end = closer.search(self.text, opener.end())
        if end is None:
            raise self.error("Unterminated comment", start)
        self.pos = end.end()
        return MustacheCommentStatement(value=self.text[opener.end() : end.start()], loc=self.range(start, self.pos))

    # -- mustaches and blocks ----------------------------------------------

    def mustache(self) -> MustacheStatement:
        start = self.pos
        trusting = self.startswith("{{{")
        self.pos += 3 if trusting else 2
        self.skip_tilde()
        path, params, hash_ = self.call()
        self.skip_tilde()
        self.expect("}}}" if trusting else "}}")
        return MustacheStatement(
            path=path, params=params, hash=hash_, trusting=trusting, loc=self.range(start, self.pos)
        )

    def block(self) -> BlockStatement:
        start = self.pos
        self.pos += 2
        self.skip_tilde()
        self.expect("#")
        path, params, hash_ = self.call()
        block_params = self.block_params()
        self.skip_tilde()
        self.expect("}}")

        chained: list[tuple[BlockStatement, int]] = []
        node = self.block_tail(path, params, hash_, block_params, chained)
        self.close_block(path, start)

        node.loc = self.range(start, self.pos)
        for statement, chain_start in chained:
            statement.loc = self.range(chain_start, self.pos)
        return node

    def block_tail(
        self,
        path: Node,
        params: list[Node],
        hash_: Hash,
        block_params: list[str],
        chained: list[tuple[BlockStatement, int]],
    ) -> BlockStatement:
        program_start = self.pos
        program = Block(body=self.body(), block_params=block_params, loc=self.range(program_start, self.pos))

        inverse: Block | None = None
        else_match = _ELSE.match(self.text, self.pos)
        if else_match:
            else_start = self.pos
            self.pos = else_match.end()
            self.skip_ws()
            if _MUSTACHE_CLOSE.match(self.text, self.pos):
                self.skip_tilde()
                self.expect("}}")
                inverse_start = self.pos
                inverse_body = self.body()
                if _ELSE.match(self.text, self.pos):
                    raise self.error("Unexpected else after final else")
                inverse = Block(body=inverse_body, loc=self.range(inverse_start, self.pos))
            else:
                chain_path, chain_params, chain_hash = self.call()
                chain_block_params = self.block_params()
                self.skip_tilde()
                self.expect("}}")
                nested = self.block_tail(chain_path, chain_params, chain_hash, chain_block_params, chained)
                chained.append((nested, else_start))
                inverse = Block(body=[nested])

        return BlockStatement(path=path, params=params, hash=hash_, program=program, inverse=inverse)

    def close_block(self, path: Node, start: int) -> None:
        name = path.original if isinstance(path, PathExpression) else None
        match = _CLOSE_BLOCK.match(self.text, self.pos)
        if match is None:
            raise self.error(f"Unclosed block '{name}'", start)
        if match.group(1) != name:
            raise self.error(f"Block '{name}' closed by '{match.group(1)}'")
        self.pos = match.end()

    def block_params(self) -> list[str]:
        self.skip_ws()
        match = _BLOCK_PARAMS.match(self.text, self.pos)
        if match is None:
            return []
        self.pos = match.end()
        return match.group(1).split()

    def call(self) -> tuple[Node, list[Node], Hash]:
        path = self.expression()
        params: list[Node] = []
        pairs: list[HashPair] = []
        while True:
            self.skip_ws()
            if self.at_end():
                raise self.error("Unterminated expression")
            if _CALL_END.match(self.text, self.pos):
                break
            key = _HASH_KEY.match(self.text, self.pos)
            if key:
                pair_start = self.pos
                self.pos = key.end()
                value = self.expression()
                pairs.append(HashPair(key=key.group(1), value=value, loc=self.range(pair_start, self.pos)))
            elif pairs:
                raise self.error("Positional argument after named arguments")
            else:
                params.append(self.expression())

        hash_loc = None
        if pairs:
            assert pairs[0].loc is not None and pairs[-1].loc is not None
            hash_loc = SourceRange(start=pairs[0].loc.start, end=pairs[-1].loc.end)
        return path, params, Hash(pairs=pairs, loc=hash_loc)

    # -- expressions -------------------------------------------------------

    def expression(self) -> Node:
        self.skip_ws()
        start = self.pos
        if self.startswith("("):
            return self.sub_expression()
        if self.text[self.pos : self.pos + 1] in ("'", '"'):
            return self.string_literal()

        number = _NUMBER.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            return NumberLiteral(value=float(number.group(0)), original=number.group(0), loc=self.range(start, self.pos))

        word = _PATH.match(self.text, self.pos)
        if word is None:
            raise self.error("Expected expression")
        self.pos = word.end()
        loc = self.range(start, self.pos)
        original = word.group(0)
        if original in ("true", "false"):
            return BooleanLiteral(value=original == "true", loc=loc)
        if original == "null":
            return NullLiteral(loc=loc)
        if original == "undefined":
            return UndefinedLiteral(loc=loc)
        return PathExpression(original=original, parts=original.split("."), data=original.startswith("@"), loc=loc)

    def sub_expression(self) -> SubExpression:
        start = self.pos
        self.pos += 1
        path, params, hash_ = self.call()
        self.skip_ws()
        self.expect(")")
        return SubExpression(path=path, params=params, hash=hash_, loc=self.range(start, self.pos))

    def string_literal(self) -> StringLiteral:
        start = self.pos
        quote = self.text[self.pos]
        self.pos += 1
        chars: list[str] = []
        while True:
            if self.at_end():
                raise self.error("Unterminated string", start)
            char = self.text[self.pos]
            if char == "\\" and self.text[self.pos + 1 : self.pos + 2] == quote:
                chars.append(quote)
                self.pos += 2
                continue
            self.pos += 1
            if char == quote:
                break
            chars.append(char)
        value = "".join(chars)
        return StringLiteral(value=value, original=value, loc=self.range(start, self.pos))

    # -- elements ----------------------------------------------------------

    def element(self) -> ElementNode:
        start = self.pos
        self.pos += 1
        name = _TAG_NAME.match(self.text, self.pos)
        assert name is not None
        tag = name.group(0)
        self.pos = name.end()

        attributes: list[AttrNode] = []
        modifiers: list[ElementModifierStatement] = []
        comments: list[MustacheCommentStatement] = []
        block_params: list[str] = []
        self_closing = False
        while True:
            self.skip_ws()
            if self.at_end():
                raise self.error(f"Unclosed start tag <{tag}>", start)
            if self.startswith("/>"):
                self.pos += 2
                self_closing = True
                break
            if self.startswith(">"):
                self.pos += 1
                break
            if _COMMENT_OPEN.match(self.text, self.pos):
                comments.append(self.mustache_comment())
            elif self.startswith("{{"):
                modifiers.append(self.modifier())
            elif _BLOCK_PARAMS.match(self.text, self.pos):
                block_params = self.block_params()
            else:
                attributes.append(self.attribute())

        children: list[Node] = []
        if not self_closing and tag not in _VOID_ELEMENTS:
            children = self.body()
            closing = f"</{tag}"
            if not self.startswith(closing):
                raise self.error(f"Unclosed element <{tag}>", start)
            self.pos += len(closing)
            self.skip_ws()
            self.expect(">")

        return ElementNode(
            tag=tag,
            self_closing=self_closing,
            attributes=attributes,
            modifiers=modifiers,
            comments=comments,
            block_params=block_params,
            children=children,
            loc=self.range(start, self.pos),
        )

    def modifier(self) -> ElementModifierStatement:
        start = self.pos
        self.pos += 2
        self.skip_tilde()
        path, params, hash_ = self.call()
        self.skip_tilde()
        self.expect("}}")
        return ElementModifierStatement(path=path, params=params, hash=hash_, loc=self.range(start, self.pos))

    def attribute(self) -> AttrNode:
        start = self.pos
        name = _ATTR_NAME.match(self.text, self.pos)
        if name is None:
            raise self.error("Expected attribute name")
        self.pos = name.end()
        if not self.startswith("="):
            return AttrNode(name=name.group(0), value=TextNode(chars=""), loc=self.range(start, self.pos))
        self.pos += 1
        value = self.attribute_value()
        return AttrNode(name=name.group(0), value=value, loc=self.range(start, self.pos))

    def attribute_value(self) -> Node:
        start = self.pos
        if self.startswith("{{"):
            return self.mustache()

        quote = self.text[self.pos : self.pos + 1]
        if quote not in ("'", '"'):
            unquoted = _UNQUOTED_VALUE.match(self.text, self.pos)
            if unquoted is None:
                raise self.error("Expected attribute value")
            self.pos = unquoted.end()
            return TextNode(chars=unquoted.group(0), loc=self.range(start, self.pos))

        self.pos += 1
        parts: list[Node] = []
        chunk_start = self.pos
        while True:
            if self.at_end():
                raise self.error("Unterminated attribute value", start)
            if self.startswith(quote) or self.startswith("{{"):
                if self.pos > chunk_start:
                    parts.append(
                        TextNode(chars=self.text[chunk_start : self.pos], loc=self.range(chunk_start, self.pos))
                    )
                if self.startswith(quote):
                    self.pos += 1
                    break
                parts.append(self.mustache())
                chunk_start = self.pos
                continue
            self.pos += 1

        loc = self.range(start, self.pos)
        if not any(isinstance(part, MustacheStatement) for part in parts):
            chars = parts[0].chars if parts and isinstance(parts[0], TextNode) else ""
            return TextNode(chars=chars, loc=loc)
        return ConcatStatement(parts=parts, loc=loc)
