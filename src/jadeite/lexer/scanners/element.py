"""Element scanner mixin: tags, classes, ids, attribute blocks, assignments
and variables."""

from collections.abc import Iterator

from jadeite.lexer.patterns import (
    ASSIGNMENT,
    ATTRIBUTE_OPERATOR,
    ATTRIBUTE_OPERATORS,
    ATTRIBUTE_SEPARATORS,
    CLASS,
    ID,
    TAG,
    VARIABLE,
)
from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import Token, TokenType

# Flags implied by each attribute operator: (escaped, checked)
_OPERATOR_FLAGS: dict[str, tuple[bool, bool]] = {
    "?!=": (False, False),
    "?=": (True, False),
    "!=": (False, True),
    "=": (True, True),
}


class ElementScannerMixin(ScannerBase):
    """Mixin scanning the pieces an element line is built from."""

    def _scan_tag(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(TAG)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.TAG, line, offset, name=match.group(0))
        yield from self._scan_classes()
        yield from self._scan_sub()

    def _scan_classes(self) -> Iterator[Token]:
        reader = self._reader
        while match := reader.match(CLASS):
            line, offset = reader.line, reader.offset
            reader.consume_match(match)
            yield self._make_token(TokenType.CLASS, line, offset, name=match.group(1))

    def _scan_class(self) -> Iterator[Token]:
        if not self._reader.peek_string("."):
            return
        produced = False
        for token in self._scan_classes():
            produced = True
            yield token
        if produced:
            yield from self._scan_sub()

    def _scan_id(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(ID)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.ID, line, offset, name=match.group(1))
        yield from self._scan_classes()
        yield from self._scan_sub()

    def _scan_attributes(self) -> Iterator[Token]:
        """Scan an ``(...)`` attribute block.

        Entries are separated by commas or whitespace. Lines starting with
        ``//`` inside the block are skipped.

        Raises:
            LexError: If the block is not closed with ``)``.
        """
        reader = self._reader
        if not reader.peek_string("("):
            return

        line, offset = reader.line, reader.offset
        reader.consume()
        yield self._make_token(TokenType.ATTRIBUTE_START, line, offset)
        reader.read_spaces()

        name_breaks = (*ATTRIBUTE_SEPARATORS, *ATTRIBUTE_OPERATORS, ")")
        value_breaks = (*ATTRIBUTE_SEPARATORS, ")")

        while reader.has_length() and not reader.peek_string(")"):
            if reader.peek_string("//"):
                reader.read_until_newline()
                reader.read_spaces()
                continue

            line, offset = reader.line, reader.offset
            name = reader.read_expression(name_breaks)

            escaped, checked = True, True
            value = None
            if operator := reader.match(ATTRIBUTE_OPERATOR):
                reader.consume_match(operator)
                escaped, checked = _OPERATOR_FLAGS[operator.group("operator")]
                value = reader.read_expression(value_breaks)

            if not name and value is None:
                raise reader.error("Unexpected character in attribute block")

            yield self._make_token(
                TokenType.ATTRIBUTE,
                line,
                offset,
                name=name or None,
                value=value,
                escaped=escaped,
                checked=checked,
            )

            if reader.peek_char(ATTRIBUTE_SEPARATORS):
                reader.read_while(lambda char: char in ATTRIBUTE_SEPARATORS)
            elif not reader.peek_string(")"):
                break

        if not reader.peek_string(")"):
            raise reader.error("Unclosed attribute block")

        line, offset = reader.line, reader.offset
        reader.consume()
        yield self._make_token(TokenType.ATTRIBUTE_END, line, offset)
        yield from self._scan_classes()
        yield from self._scan_sub()

    def _scan_assignment(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(ASSIGNMENT)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.ASSIGNMENT, line, offset, name=match.group(1))

    def _scan_variable(self) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(VARIABLE)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        yield self._make_token(TokenType.VARIABLE, line, offset, name=match.group(1))
