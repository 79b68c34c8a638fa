"""Text scanner mixin: comments, filters, expressions, code, markup, piped
text, plain text and doctypes."""

from collections.abc import Iterator

from jadeite.lexer.patterns import CODE, COMMENT, DOCTYPE, EXPRESSION, FILTER, TEXT_LINE
from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import Token, TokenType


class TextScannerMixin(ScannerBase):
    """Mixin scanning constructs whose payload is text or embedded code."""

    def _scan_doctype(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(DOCTYPE)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.DOCTYPE, line, offset, name=match.group("name").strip())

    def _scan_comment(self) -> Iterator[Token]:
        """Scan ``// comment`` (rendered) or ``//- comment`` (hidden)."""
        reader = self._reader
        match = reader.match(COMMENT)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.COMMENT, line, offset, hidden=bool(match.group("hidden")))
        yield from self._scan_text_block()

    def _scan_filter(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(FILTER)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.FILTER, line, offset, name=match.group(1))
        yield from self._scan_text_block()

    def _scan_expression(self) -> Iterator[Token]:
        """Scan ``= expr``, ``!= expr``, ``?= expr`` or ``?!= expr``."""
        reader = self._reader
        match = reader.match(EXPRESSION)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        value = reader.read_expression(("\n", "//")) or ""
        yield self._make_token(
            TokenType.EXPRESSION,
            line,
            offset,
            value=value,
            escaped=not match.group("unescaped"),
            checked=not match.group("unchecked"),
        )

    def _scan_code(self) -> Iterator[Token]:
        """Scan ``- code`` (inline) or a bare ``-`` opening a code block."""
        reader = self._reader
        match = reader.match(CODE)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        code = reader.read_until_newline().strip()
        if code:
            yield self._make_token(TokenType.CODE, line, offset, value=code)
            return
        yield self._make_token(TokenType.CODE, line, offset, block=True)
        yield from self._scan_text_block()

    def _scan_markup(self) -> Iterator[Token]:
        """A line starting with ``<`` is passed through as literal markup."""
        if not self._reader.peek_string("<"):
            return
        yield from self._scan_text()

    def _scan_text_line(self) -> Iterator[Token]:
        """Scan piped text: ``| text`` or ``!| text`` for escaped text."""
        reader = self._reader
        match = reader.match(TEXT_LINE)
        if not match:
            return
        reader.consume_match(match)
        yield from self._scan_text_block(escaped=bool(match.group("escaped")))
