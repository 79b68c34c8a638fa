"""Template scanner mixin: imports, blocks, mixin definitions and calls."""

from collections.abc import Iterator

from jadeite.lexer.patterns import BLOCK, BLOCK_SHORTHAND, IMPORT, MIXIN, MIXIN_CALL
from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import Token, TokenType


class TemplateScannerMixin(ScannerBase):
    """Mixin scanning the constructs that compose templates."""

    def _scan_import(self) -> Iterator[Token]:
        """Scan ``extends path``, ``include path`` or ``include:filter path``."""
        reader = self._reader
        match = reader.match(IMPORT)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(
            TokenType.IMPORT,
            line,
            offset,
            import_type=match.group("type"),
            filter=match.group("filter"),
            path=match.group("path").strip(),
        )

    def _scan_block(self) -> Iterator[Token]:
        """Scan ``block [mode] [name]`` or the ``append|prepend|replace name``
        shorthand."""
        reader = self._reader
        match = reader.match(BLOCK) or reader.match(BLOCK_SHORTHAND)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(
            TokenType.BLOCK,
            line,
            offset,
            name=match.group("name"),
            mode=match.group("mode"),
        )
        yield from self._scan_sub()

    def _scan_mixin(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(MIXIN)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.MIXIN, line, offset, name=match.group(1))
        yield from self._scan_classes()
        yield from self._scan_sub()

    def _scan_mixin_call(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(MIXIN_CALL)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.MIXIN_CALL, line, offset, name=match.group(1))
        yield from self._scan_classes()
        yield from self._scan_sub()
