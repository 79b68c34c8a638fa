"""Cursor over template source with the reading primitives scanners share.

The reader owns the position, line and offset bookkeeping. Every consuming
call goes through ``consume()``, which keeps line and offset in step with
the absolute position.

Thread Safety:
Reader instances are single-use and owned by one Lexer.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Mapping, Sequence

from jadeite.errors import LexError
from jadeite.lexer.patterns import DEFAULT_BRACKETS, INDENT_CHARS, QUOTE_CHARS, SPACE_CHARS

# Characters dropped before lexing
_STRIPPED_CHARS = str.maketrans("", "", "\0\r\v")


class Reader:
    """Forward-only cursor over normalized template source.

    Usage:
        >>> reader = Reader('a(href="x")')
        >>> reader.match(re.compile(r"[a-z]+")).group(0)
        'a'
        >>> reader.consume(1)
        'a'
        >>> reader.peek()
        '('

    """

    __slots__ = ("_source", "_source_len", "_pos", "_line", "_offset", "_source_file")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        self._source = source.translate(_STRIPPED_CHARS)
        self._source_len = len(self._source)
        self._pos = 0
        self._line = 1
        self._offset = 0
        self._source_file = source_file

    @property
    def line(self) -> int:
        """Current line (1-indexed)."""
        return self._line

    @property
    def offset(self) -> int:
        """Current offset within the line (0-indexed)."""
        return self._offset

    @property
    def position(self) -> int:
        """Absolute position in the normalized source."""
        return self._pos

    @property
    def source(self) -> str:
        return self._source

    def has_length(self) -> bool:
        return self._pos < self._source_len

    # =========================================================================
    # Peeking
    # =========================================================================

    def peek(self, length: int = 1) -> str:
        """Return up to ``length`` characters at the cursor without consuming."""
        return self._source[self._pos : self._pos + length]

    def peek_string(self, string: str) -> bool:
        return self._source.startswith(string, self._pos)

    def peek_char(self, chars: Collection[str]) -> bool:
        """Check whether the next character is one of ``chars``."""
        return self._pos < self._source_len and self._source[self._pos] in chars

    def peek_newline(self) -> bool:
        return self.peek_string("\n")

    def peek_quote(self) -> bool:
        return self.peek_char(QUOTE_CHARS)

    def match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """Match ``pattern`` anchored at the cursor. Does not consume."""
        return pattern.match(self._source, self._pos)

    # =========================================================================
    # Consuming
    # =========================================================================

    def consume(self, length: int = 1) -> str:
        """Consume ``length`` characters and return them.

        Raises:
            LexError: If fewer than ``length`` characters remain.
        """
        end = self._pos + length
        if end > self._source_len:
            raise self.error(f"Failed to consume {length} characters, only {self._source_len - self._pos} left")
        consumed = self._source[self._pos : end]
        newlines = consumed.count("\n")
        if newlines:
            self._line += newlines
            self._offset = length - consumed.rfind("\n") - 1
        else:
            self._offset += length
        self._pos = end
        return consumed

    def consume_match(self, match: re.Match[str]) -> str:
        """Consume the text covered by a match obtained from ``match()``."""
        return self.consume(match.end() - self._pos)

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        end = self._pos
        while end < self._source_len and predicate(self._source[end]):
            end += 1
        return self.consume(end - self._pos)

    def read_until(self, predicate: Callable[[str], bool]) -> str:
        return self.read_while(lambda char: not predicate(char))

    def read_indentation(self) -> str:
        return self.read_while(INDENT_CHARS.__contains__)

    def read_spaces(self) -> str:
        """Consume blanks and line breaks."""
        return self.read_while(SPACE_CHARS.__contains__)

    def read_until_newline(self) -> str:
        return self.read_until("\n".__eq__)

    def read_string(
        self,
        escape_sequences: Mapping[str, str] | None = None,
        in_expression: bool = False,
    ) -> str | None:
        """Read a quoted string starting at the cursor.

        A backslash escapes the string's own quote character and any
        character listed in ``escape_sequences`` (keyed by the character
        following the backslash). Other backslashes are kept literally.

        Args:
            escape_sequences: Escapes to honour, e.g. ``{"n": "\\n"}``
            in_expression: Keep the quotes and escaping backslashes, so the
                result can be pasted back into code

        Returns:
            The string contents, or None when the cursor is not at a quote.

        Raises:
            LexError: If the string is not closed.
        """
        if not self.peek_quote():
            return None

        start_line, start_offset = self._line, self._offset
        quote = self.consume()
        sequences = dict(escape_sequences or {})
        sequences[quote] = quote

        parts: list[str] = []
        while self.has_length():
            char = self.consume()
            if char == "\\" and self.peek() in sequences and self.has_length():
                escaped = self.consume()
                if in_expression:
                    parts.append("\\")
                parts.append(sequences[escaped])
                continue
            if char == quote:
                string = "".join(parts)
                return f"{quote}{string}{quote}" if in_expression else string
            parts.append(char)

        raise LexError(
            f"Unclosed string ({quote}) encountered",
            start_line,
            start_offset,
            self._source_file,
        )

    def read_expression(
        self,
        breaks: Sequence[str] = (),
        brackets: Mapping[str, str] | None = None,
    ) -> str | None:
        """Read code up to the first break string outside of brackets.

        Quoted strings are read as units, so brackets and break strings
        inside them are ignored.

        Args:
            breaks: Strings that end the expression at bracket depth 0
            brackets: Opening bracket to closing bracket

        Returns:
            The trimmed expression, or None at end of input.

        Raises:
            LexError: On a closing bracket without an opener, a closing
                bracket that doesn't match the innermost opener, or brackets
                still open at the end of input.
        """
        if not self.has_length():
            return None

        brackets = brackets or DEFAULT_BRACKETS
        closing = set(brackets.values())
        stack: list[str] = []
        parts: list[str] = []
        while self.has_length():
            string = self.read_string(in_expression=True)
            if string is not None:
                parts.append(string)
                continue

            if not stack and any(self.peek_string(b) for b in breaks):
                break

            char = self.peek()
            if char in brackets:
                stack.append(char)
            elif char in closing:
                if not stack:
                    raise self.error(f"Unexpected bracket {char} encountered, no brackets open")
                if char != brackets[stack[-1]]:
                    raise self.error(f"Unclosed bracket {stack[-1]} encountered, got {char} instead")
                stack.pop()
            parts.append(self.consume())

        if stack:
            raise self.error(f"Unclosed brackets {', '.join(stack)} encountered at end of string")

        return "".join(parts).strip()

    def error(self, message: str) -> LexError:
        """Build a LexError at the cursor, quoting the upcoming text."""
        near = self.peek(20)
        if near:
            message = f"{message} near {near!r}"
        return LexError(message, self._line, self._offset, self._source_file)


__all__ = ["Reader"]
