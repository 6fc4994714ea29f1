import re
from urllib.parse import unquote, urlparse

from glimmer_complete.models import Position

_NEWLINE = re.compile(r"\r\n?|\n")


def uri_to_file_path(uri: str) -> str | None:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return unquote(parsed.path)
    if parsed.scheme == "":
        return uri
    return None


def _utf16_length(text: str) -> int:
    return sum(2 if ord(char) > 0xFFFF else 1 for char in text)


class TextDocument:
    """An open document's text with wire/engine position conversion.

    Wire positions count UTF-16 code units per line; the template engine
    works with code-point columns.
    """

    def __init__(self, uri: str, text: str, version: int = 0) -> None:
        self.uri = uri
        self.text = text
        self.version = version
        self._line_starts = [0] + [m.end() for m in _NEWLINE.finditer(text)]

    def get_text(self) -> str:
        return self.text

    def _line_bounds(self, line: int) -> tuple[int, int]:
        start = self._line_starts[line]
        end = self._line_starts[line + 1] if line + 1 < len(self._line_starts) else len(self.text)
        while end > start and self.text[end - 1] in "\r\n":
            end -= 1
        return start, end

    def offset_at(self, position: Position) -> int:
        if position.line >= len(self._line_starts):
            return len(self.text)
        start, end = self._line_bounds(max(position.line, 0))
        offset, units = start, 0
        while offset < end and units < position.column:
            units += _utf16_length(self.text[offset])
            offset += 1
        return offset

    def _line_of(self, offset: int) -> int:
        line = 0
        for index, start in enumerate(self._line_starts):
            if start > offset:
                break
            line = index
        return line

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self.text))
        line = self._line_of(offset)
        start = self._line_starts[line]
        return Position(line=line, column=_utf16_length(self.text[start:offset]))

    def codepoint_position(self, position: Position) -> Position:
        """Translate a wire position into the code-point position the template AST uses."""
        offset = self.offset_at(position)
        line = self._line_of(offset)
        return Position(line=line, column=offset - self._line_starts[line])

    def wire_position(self, position: Position) -> Position:
        """Translate a code-point position back into a wire position."""
        if position.line >= len(self._line_starts):
            return self.position_at(len(self.text))
        start, end = self._line_bounds(position.line)
        return self.position_at(min(start + position.column, end))
