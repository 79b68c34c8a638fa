"""String interpolation.

``#{expr}`` echoes an escaped expression, ``!{expr}`` a raw one. A leading
``?`` (``?#{$maybe}``) drops the isset guard around plain variables.
``#[tpl]`` compiles a template fragment in place, ``![tpl]`` echoes the
compiled fragment HTML-escaped.

Interpolations are found in one left-to-right pass; brackets inside the
subject nest.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from jadeite.stringbuilder import StringBuilder
from jadeite.utils.text import escape_html, is_variable, quote_php_string

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext
    from jadeite.nodes import Document, Node

_INTERPOLATION_START = re.compile(r"([?]?)([#!])([\[{])")
_CLOSING = {"[": "]", "{": "}"}


class InterpolationMixin:
    """Mixin expanding interpolations in text and literal values.

    Required Host Methods:
        - _create_echo(ctx, code)
        - _html_entities(ctx, code)
        - _parse_fragment(ctx, source)
        - _compile_node(ctx, node)
        - _error(ctx, message, node)

    """

    def _interpolate(
        self,
        ctx: CompileContext,
        string: str,
        *,
        in_code: bool = False,
        escape: bool = False,
        node: Node | None = None,
    ) -> str:
        """Expand all interpolations in ``string``.

        Args:
            ctx: Current compile context
            string: Text possibly containing interpolations
            in_code: The result goes inside a single-quoted PHP string, so
                literal parts are quoted and interpolations become
                concatenations
            escape: HTML-escape the literal parts
            node: Node the string belongs to, for error locations

        Raises:
            CompileError: If an interpolation is not closed.
        """
        sb = StringBuilder()
        position = 0
        while match := _INTERPOLATION_START.search(string, position):
            check, escape_type, opening = match.groups()
            closing = _CLOSING[opening]
            start = match.end()
            depth = 1
            index = start
            while index < len(string):
                char = string[index]
                if char == opening:
                    depth += 1
                elif char == closing:
                    depth -= 1
                    if depth == 0:
                        break
                index += 1
            else:
                raise self._error(
                    ctx,
                    f"Failed to interpolate value, {opening} is not closed with {closing}",
                    node,
                )

            sb.append(self._literal(string[position : match.start()], in_code, escape))
            subject = string[start:index]
            if opening == "{":
                sb.append(self._interpolate_code(ctx, subject, check, escape_type, in_code))
            elif subject.strip().lower() == "endif":
                # <![endif]--> of IE conditional comments
                sb.append(self._literal(string[match.start() : index + 1], in_code, escape))
            else:
                sb.append(self._interpolate_markup(ctx, subject, escape_type, in_code))
            position = index + 1

        sb.append(self._literal(string[position:], in_code, escape))
        return sb.build()

    def _literal(self, text: str, in_code: bool, escape: bool) -> str:
        if escape:
            text = escape_html(text)
        if in_code:
            text = quote_php_string(text)
        return text

    def _interpolate_code(
        self,
        ctx: CompileContext,
        subject: str,
        check: str,
        escape_type: str,
        in_code: bool,
    ) -> str:
        code = subject.strip()
        if is_variable(code) and check != "?":
            code = f"isset({code}) ? {code} : ''"
        if escape_type != "!":
            code = self._html_entities(ctx, code)
        return f"'.({code}).'" if in_code else self._create_echo(ctx, code)

    def _interpolate_markup(
        self,
        ctx: CompileContext,
        subject: str,
        escape_type: str,
        in_code: bool,
    ) -> str:
        document: Document = self._parse_fragment(ctx, subject)
        markup = self._compile_node(ctx, document).strip()
        if escape_type == "!":
            code = self._html_entities(ctx, f"'{quote_php_string(markup)}'")
            return f"'.({code}).'" if in_code else self._create_echo(ctx, code)
        return quote_php_string(markup) if in_code else markup
