"""Priority-ordered scanner lexer.

The lexer tries its scanners in a fixed priority order at the cursor. The
first scanner that yields tokens wins and the loop restarts from the top.
A scanner may also consume input without yielding (trailing whitespace,
comments inside attribute blocks); the loop restarts then as well. When no
scanner moves the cursor the input is invalid.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from jadeite.lexer.reader import Reader
from jadeite.lexer.scanners import (
    ControlScannerMixin,
    ElementScannerMixin,
    TemplateScannerMixin,
    TextScannerMixin,
)
from jadeite.tokens import Token


class Lexer(
    TemplateScannerMixin,
    ControlScannerMixin,
    ElementScannerMixin,
    TextScannerMixin,
):
    """Lexer for indentation-based templates.

    Usage:
        >>> lexer = Lexer("ul\\n  li.item Hello")
        >>> for token in lexer.tokenize():
        ...     print(token)
        Token(TAG, 'ul', 1:0)
        Token(NEWLINE, 1:2)
        Token(INDENT, 2:0)
        Token(TAG, 'li', 2:2)
        Token(CLASS, 'item', 2:4)
        Token(TEXT, 'Hello', 2:9)

    Indentation:
        The first indented line fixes the indentation style (tabs or
        spaces) and width unless they are passed in. Lines mixing tabs and
        spaces are converted to the established style.

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_reader",
        "_source_file",
        "_level",
        "_indent_style",
        "_indent_width",
        "_explicit_style",
        "_scanners",
    )

    def __init__(
        self,
        source: str,
        *,
        indent_style: str | None = None,
        indent_width: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Template source text
            indent_style: ``" "`` or ``"\\t"``; inferred from the source when None
            indent_width: Characters per level; inferred from the source when None
            source_file: Optional source file path for error messages
        """
        if indent_style not in (None, " ", "\t"):
            raise ValueError(f"indent_style must be a space, a tab or None, got {indent_style!r}")
        self._reader = Reader(source, source_file)
        self._source_file = source_file
        self._level = 0
        self._indent_style = indent_style
        self._indent_width = indent_width
        self._explicit_style = indent_style is not None

        self._scanners: tuple[Callable[[], Iterator[Token]], ...] = (
            self._scan_newline,
            self._scan_indentation,
            self._scan_import,
            self._scan_block,
            self._scan_conditional,
            self._scan_each,
            self._scan_case,
            self._scan_when,
            self._scan_do,
            self._scan_while,
            self._scan_for,
            self._scan_mixin,
            self._scan_mixin_call,
            self._scan_doctype,
            self._scan_tag,
            self._scan_class,
            self._scan_id,
            self._scan_attributes,
            self._scan_assignment,
            self._scan_variable,
            self._scan_comment,
            self._scan_filter,
            self._scan_expression,
            self._scan_code,
            self._scan_markup,
            self._scan_text_line,
            self._scan_text,
        )

    @property
    def level(self) -> int:
        """Current indentation level."""
        return self._level

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time

        Raises:
            LexError: On input no scanner accepts.
        """
        reader = self._reader
        while reader.has_length():
            position = reader.position
            for scan in self._scanners:
                produced = False
                for token in scan():
                    produced = True
                    yield token
                if produced or reader.position != position:
                    break
            else:
                raise reader.error("Unexpected input")
