"""Pretty-printing and delimiter helpers for the compiler.

The output level is tracked on the CompileContext, independent of the
tree depth: a named block or a spliced import does not add a level, an
element's children do.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from jadeite.utils.text import quote_php_string

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext

# Line break of a multi-line code fragment, with the source indentation after it
_CODE_LINE_BREAK = re.compile(r"\n[\t ]*")


class FormattingMixin:
    """Mixin producing newlines, indentation and delimited code fragments."""

    def _newline(self, ctx: CompileContext) -> str:
        return "\n" if ctx.config.pretty else ""

    def _indent(self, ctx: CompileContext, offset: int = 0) -> str:
        """Indentation for the current output level plus ``offset``."""
        config = ctx.config
        if not config.pretty:
            return ""
        return config.indent_style * ((ctx.level + offset) * config.indent_width)

    def _create_code(
        self,
        ctx: CompileContext,
        code: str,
        prefix: str | None = None,
        suffix: str | None = None,
    ) -> str:
        """Wrap ``code`` in delimiters, statement delimiters by default.

        Multi-line code is re-indented one level deeper than the current
        output level in pretty mode and joined with single spaces otherwise.
        """
        start, end = ctx.config.statement_delimiters
        prefix = start if prefix is None else prefix
        suffix = end if suffix is None else suffix

        if "\n" in code:
            lines = _CODE_LINE_BREAK.split(code.strip())
            if ctx.config.pretty:
                separator = self._newline(ctx) + self._indent(ctx, 1)
                code = separator.join(lines) + self._newline(ctx) + self._indent(ctx)
            else:
                code = " ".join(lines)

        return f"{prefix}{code}{suffix}"

    def _create_echo(self, ctx: CompileContext, code: str) -> str:
        start, end = ctx.config.echo_delimiters
        return self._create_code(ctx, code, start, end)

    def _create_comment(self, ctx: CompileContext, text: str, *, hidden: bool = False) -> str:
        config = ctx.config
        start, end = config.hidden_comment_delimiters if hidden else config.comment_delimiters
        return self._create_code(ctx, text, start, end)

    def _html_entities(self, ctx: CompileContext, code: str) -> str:
        """PHP call escaping the result of ``code`` for HTML output."""
        charset = quote_php_string(ctx.config.escape_charset)
        return f"htmlentities({code}, \\ENT_QUOTES, '{charset}')"
