"""Layout and text primitives shared by every scanner mixin.

Covers line breaks, indentation tracking, plain text, text blocks and the
sub-scanner that runs after tags, classes, attribute blocks and control
statements.
"""

import re
from collections.abc import Callable, Iterator

from jadeite.errors import LexError
from jadeite.lexer.patterns import EXPANSION, TEXT_BLOCK_START
from jadeite.lexer.reader import Reader
from jadeite.tokens import Token, TokenType
from jadeite.utils.logger import get_logger

logger = get_logger(__name__)

# Spaces that make up one tab when space indentation is folded into tabs
TAB_SIZE = 4
_SPACE_RUN = re.compile(" +")


def _spaces_to_tabs(match: re.Match[str]) -> str:
    """Fold a run of spaces into tabs, rounding half up; any run is at least one tab."""
    return "\t" * max(1, (len(match.group()) + TAB_SIZE // 2) // TAB_SIZE)


class ScannerBase:
    """Base of all scanner mixins.

    Each ``_scan_*`` method is a generator. A scanner that does not apply at
    the cursor yields nothing and leaves the reader untouched.

    Required Host Attributes:
        - _reader: Reader
        - _source_file: str | None
        - _level: int
        - _indent_style: str | None
        - _indent_width: int | None
        - _explicit_style: bool

    Required Host Methods:
        - _scan_classes() -> Iterator[Token] (ElementScannerMixin)

    """

    _reader: Reader
    _source_file: str | None
    _level: int
    _indent_style: str | None
    _indent_width: int | None
    _explicit_style: bool
    _scan_classes: Callable[[], Iterator[Token]]

    def _make_token(self, token_type: TokenType, line: int, offset: int, **payload: object) -> Token:
        return Token(token_type, line, offset, self._level, **payload)  # type: ignore[arg-type]

    # =========================================================================
    # Layout
    # =========================================================================

    def _scan_newline(self) -> Iterator[Token]:
        reader = self._reader
        if not reader.peek_newline():
            return
        line, offset = reader.line, reader.offset
        reader.consume()
        yield self._make_token(TokenType.NEWLINE, line, offset)

    def _scan_indentation(self) -> Iterator[Token]:
        """Emit INDENT/OUTDENT tokens for the indentation of a new line.

        Only applies at the start of a line. Blank lines leave the level
        untouched. A line can open at most one level.
        """
        reader = self._reader
        if reader.offset != 0:
            return

        line = reader.line
        indent = reader.read_indentation()
        if not reader.has_length() or reader.peek_newline():
            return

        if indent:
            indent = self._normalize_indent(indent, line)
            if self._indent_width is None:
                self._indent_width = len(indent)
            width = self._indent_width
            new_level = (2 * len(indent) + width) // (2 * width)
            new_level = min(new_level, self._level + 1)
        else:
            new_level = 0

        while self._level < new_level:
            self._level += 1
            yield self._make_token(TokenType.INDENT, line, 0)
        while self._level > new_level:
            self._level -= 1
            yield self._make_token(TokenType.OUTDENT, line, 0)

    def _normalize_indent(self, indent: str, line: int) -> str:
        """Bring an indentation run to the established style."""
        has_tabs = "\t" in indent
        has_spaces = " " in indent
        style = "\t" if has_tabs and not has_spaces else " "

        if self._indent_style is None:
            self._indent_style = style
            if not (has_tabs and has_spaces):
                return indent
        elif has_tabs != has_spaces and style != self._indent_style and self._explicit_style:
            expected = "tabs" if self._indent_style == "\t" else "spaces"
            raise LexError(
                f"Indentation uses {'tabs' if has_tabs else 'spaces'}, but {expected} are configured",
                line,
                0,
                self._source_file,
            )
        elif has_tabs != has_spaces and style == self._indent_style:
            return indent

        logger.warning(
            "Converting mixed indentation on line %d to %s",
            line,
            "tabs" if self._indent_style == "\t" else "spaces",
        )
        if self._indent_style == "\t":
            return _SPACE_RUN.sub(_spaces_to_tabs, indent)
        return indent.replace("\t", " " * (self._indent_width or TAB_SIZE))

    def _loop_scan(self, *scanners: Callable[[], Iterator[Token]]) -> Iterator[Token]:
        """Run ``scanners`` in order, repeatedly, until none yields a token."""
        while self._reader.has_length():
            produced = False
            for scan in scanners:
                for token in scan():
                    produced = True
                    yield token
            if not produced:
                return

    # =========================================================================
    # Text
    # =========================================================================

    def _scan_text(self, escaped: bool = False) -> Iterator[Token]:
        """Scan the rest of the line as text."""
        reader = self._reader
        line, offset = reader.line, reader.offset
        text = reader.read_until_newline().strip()
        if text:
            yield self._make_token(TokenType.TEXT, line, offset, value=text, escaped=escaped)

    def _scan_text_block(self, escaped: bool = False) -> Iterator[Token]:
        """Scan the rest of the line plus every deeper-indented line below it."""
        yield from self._scan_text(escaped)
        yield from self._scan_newline()

        level = 0
        while self._reader.has_length():
            for token in self._loop_scan(self._scan_indentation, self._scan_newline):
                if token.type is TokenType.INDENT:
                    level += 1
                elif token.type is TokenType.OUTDENT:
                    level -= 1
                yield token

            if level <= 0:
                break

            yield from self._scan_text(escaped)

    # =========================================================================
    # Sub scanner
    # =========================================================================

    def _scan_sub(self) -> Iterator[Token]:
        """Scan what may directly follow a tag-like construct.

        ``.``/``!.`` open a text block, ``!`` starts escaped inline text and
        ``:`` expands into a nested construct on the same line.
        """
        reader = self._reader
        match = reader.match(TEXT_BLOCK_START)
        if match:
            reader.consume_match(match)
            yield from self._scan_text_block(escaped=bool(match.group("escaped")))
            return

        if reader.peek_string("!") and not reader.peek_string("!="):
            reader.consume()
            yield from self._scan_text(escaped=True)
            return

        yield from self._scan_expansion()

    def _scan_expansion(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(EXPANSION)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.EXPANSION, line, offset, has_space=bool(match.group("space")))
