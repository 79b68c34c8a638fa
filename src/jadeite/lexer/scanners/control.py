"""Control statement scanner mixin.

All statements share one scanning routine: keyword, optional subject, then
the sub-scanner. A subject wrapped entirely in parentheses loses that one
outer pair, so ``if ($a)`` and ``if $a`` produce the same token.
"""

import re
from collections.abc import Iterator

from jadeite.errors import LexError
from jadeite.lexer.patterns import CASE, CONDITIONAL, DO, EACH, EACH_HEAD, FOR, WHEN, WHILE
from jadeite.lexer.scanners.base import ScannerBase
from jadeite.tokens import Token, TokenType

# A colon followed by whitespace (or the end of the line) starts an
# expansion; ``::`` inside a subject does not.
SUBJECT_BREAKS = ("\n", ": ", ":\t", ":\n")

_SPACES = re.compile(r"[\t ]+")


def strip_outer_parentheses(subject: str) -> str:
    """Remove one pair of parentheses enclosing the whole subject."""
    if not (subject.startswith("(") and subject.endswith(")")):
        return subject
    depth = 0
    quote = None
    for index, char in enumerate(subject):
        if quote:
            if char == quote and subject[index - 1] != "\\":
                quote = None
            continue
        if char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and index != len(subject) - 1:
                return subject
    return subject[1:-1].strip()


class ControlScannerMixin(ScannerBase):
    """Mixin scanning if/unless/elseif/else, case/when/default, each,
    while, do and for."""

    def _scan_statement(self, pattern: re.Pattern[str], token_type: TokenType) -> Iterator[Token]:
        reader = self._reader
        match = reader.match(pattern)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)
        name = _SPACES.sub("", match.group("name"))

        subject = self._read_subject()
        payload: dict[str, object] = {"subject": subject}
        if token_type is TokenType.CONDITIONAL:
            payload["mode"] = name
        elif token_type is TokenType.WHEN:
            payload["default"] = name == "default"

        yield self._make_token(token_type, line, offset, **payload)
        yield from self._scan_sub()

    def _read_subject(self) -> str | None:
        reader = self._reader
        if reader.peek_char(":\n"):
            return None
        subject = reader.read_expression(SUBJECT_BREAKS)
        if subject and subject.endswith(":") and not subject.endswith("::"):
            # Statement followed by a bare colon at end of input
            subject = subject[:-1].rstrip()
        return strip_outer_parentheses(subject) if subject else None

    def _scan_conditional(self) -> Iterator[Token]:
        return self._scan_statement(CONDITIONAL, TokenType.CONDITIONAL)

    def _scan_case(self) -> Iterator[Token]:
        return self._scan_statement(CASE, TokenType.CASE)

    def _scan_when(self) -> Iterator[Token]:
        return self._scan_statement(WHEN, TokenType.WHEN)

    def _scan_while(self) -> Iterator[Token]:
        return self._scan_statement(WHILE, TokenType.WHILE)

    def _scan_do(self) -> Iterator[Token]:
        return self._scan_statement(DO, TokenType.DO)

    def _scan_for(self) -> Iterator[Token]:
        return self._scan_statement(FOR, TokenType.FOR)

    def _scan_each(self) -> Iterator[Token]:
        """Scan ``each [$]item[, [$]key] in subject``.

        Raises:
            LexError: If the loop head does not follow that syntax.
        """
        reader = self._reader
        match = reader.match(EACH)
        if not match:
            return
        line, offset = reader.line, reader.offset
        reader.consume_match(match)

        head = reader.match(EACH_HEAD)
        if not head:
            raise LexError(
                "The syntax for each is `each [$]itemName[, [$]keyName] in [subject]`",
                line,
                offset,
                self._source_file,
            )
        reader.consume_match(head)

        yield self._make_token(
            TokenType.EACH,
            line,
            offset,
            item_name=head.group("item"),
            key_name=head.group("key"),
            subject=self._read_subject(),
        )
        yield from self._scan_sub()
