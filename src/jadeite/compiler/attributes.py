"""Attribute compilation and PHP literal export.

Attributes and assignments of an element are flattened into one ordered
multimap. Each name then becomes either literal markup, when all of its
values are known at compile time, or a guarded runtime builder call.

Builders by attribute name (HTML and XHTML):
    class   values joined with spaces
    style   values joined with ``; ``
    data-*  several values become a JSON list
    other   values concatenated

Literal keywords:
    false, null   suppress the attribute
    true          bare name in HTML, ``name="name"`` in XML/XHTML
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jadeite.config import Mode
from jadeite.nodes import Element, MixinCall
from jadeite.stringbuilder import StringBuilder
from jadeite.utils.text import is_numeric, is_scalar, is_variable, strip_quotes

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext

_ASSIGNMENT_ALIASES = {"classes": "class", "styles": "style"}
_SUPPRESSING = frozenset({"false", "null"})
_KEYWORDS = frozenset({"false", "null", "true"})

# Entity for the attribute quote inside an inlined JSON payload
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&#39;"}


@dataclass(frozen=True, slots=True)
class AttributeEntry:
    """One flattened attribute value; ``name`` is None for positional values."""

    name: str | None
    value: str | None
    escaped: bool = True
    checked: bool = True


class AttributeCompilerMixin:
    """Mixin compiling attribute lists and exporting PHP literals.

    Required Host Methods:
        - _interpolate(ctx, string, in_code=..., escape=..., node=...)
        - _create_code(ctx, code)
        - _error(ctx, message, node)

    """

    # =========================================================================
    # Collection
    # =========================================================================

    def _collect_attributes(self, ctx: CompileContext, node: Element | MixinCall) -> list[AttributeEntry]:
        """Flatten attributes and ``&name(...)`` assignments in source order.

        Raises:
            CompileError: If ``&attributes`` receives an unnamed value.
        """
        html_like = ctx.mode is not Mode.XML
        entries = [
            AttributeEntry(attr.name, attr.value, attr.escaped, attr.checked)
            for attr in node.attributes
        ]
        for assignment in node.assignments:
            name = assignment.name
            if html_like:
                name = _ASSIGNMENT_ALIASES.get(name, name)
            if html_like and name == "attributes":
                for attr in assignment.attributes:
                    if attr.name is None or attr.value is None:
                        raise self._error(
                            ctx,
                            "&attributes only accepts named values, e.g. &attributes(href='/')",
                            node,
                        )
                    entries.append(AttributeEntry(attr.name, attr.value, attr.escaped, attr.checked))
                continue
            for attr in assignment.attributes:
                value = attr.value if attr.value is not None else attr.name
                entries.append(AttributeEntry(name, value, attr.escaped, attr.checked))
        return entries

    # =========================================================================
    # Markup
    # =========================================================================

    def _compile_attributes(self, ctx: CompileContext, node: Element) -> str:
        grouped: dict[str, list[AttributeEntry]] = {}
        for entry in self._collect_attributes(ctx, node):
            grouped.setdefault(entry.name or "", []).append(entry)

        sb = StringBuilder()
        for name, entries in grouped.items():
            sb.append(self._compile_attribute(ctx, name, entries, node))
        return sb.build()

    def _compile_attribute(
        self,
        ctx: CompileContext,
        name: str,
        entries: Sequence[AttributeEntry],
        node: Element,
    ) -> str:
        valued = [entry for entry in entries if entry.value is not None and entry.value.strip()]
        escaped = all(entry.escaped for entry in entries)

        if any(not is_scalar(entry.value) for entry in valued):
            return self._compile_dynamic_attribute(ctx, name, valued, escaped)

        values = [entry.value.strip() for entry in valued]  # type: ignore[union-attr]
        kept = [value for value in values if value.lower() not in _SUPPRESSING]
        if values and not kept:
            return ""
        literals = [value for value in kept if value.lower() != "true"]
        if kept and not literals:
            return self._compile_true_attribute(ctx, name)
        if not literals:
            return self._compile_valueless_attribute(ctx, name)

        compiled = [
            self._interpolate(ctx, self._unquote(ctx, value), escape=escaped, node=node)
            for value in literals
        ]
        quote = ctx.config.quote_style
        html_like = ctx.mode is not Mode.XML
        if len(compiled) > 1 and html_like and name.startswith("data-"):
            payload = json.dumps(compiled).replace(quote, _QUOTE_ENTITIES[quote])
            return f" {name}={quote}{payload}{quote}"
        return f" {name}={quote}{self._join_literals(ctx, name, compiled)}{quote}"

    def _join_literals(self, ctx: CompileContext, name: str, values: list[str]) -> str:
        if ctx.mode is not Mode.XML:
            if name == "class":
                return " ".join(values)
            if name == "style":
                return "; ".join(values)
        return "".join(values)

    def _compile_true_attribute(self, ctx: CompileContext, name: str) -> str:
        if ctx.mode is Mode.HTML:
            return f" {name}"
        quote = ctx.config.quote_style
        return f" {name}={quote}{name}{quote}"

    def _compile_valueless_attribute(self, ctx: CompileContext, name: str) -> str:
        quote = ctx.config.quote_style
        match ctx.mode:
            case Mode.HTML:
                return f" {name}"
            case Mode.XHTML if name in ctx.config.self_repeating_attributes:
                return f" {name}={quote}{name}{quote}"
            case _:
                return f" {name}={quote}{quote}"

    def _compile_dynamic_attribute(
        self,
        ctx: CompileContext,
        name: str,
        entries: Sequence[AttributeEntry],
        escaped: bool,
    ) -> str:
        """Emit a runtime guard that prints the attribute unless its value is null/false."""
        prefix = ctx.config.runtime_prefix
        builder = f"{prefix}{self._builder_name(ctx, name)}"
        quote = "'\\''" if ctx.config.quote_style == "'" else "'\"'"
        flag = "true" if escaped else "false"
        codes = [self._export_attribute_value(ctx, entry) for entry in entries]

        if len(codes) == 1:
            if ctx.mode is Mode.HTML and name in ctx.config.self_repeating_attributes:
                echo = f"echo ' {name}';"
            else:
                echo = f"echo ' {name}='.{builder}($__value, {quote}, {flag});"
            code = (
                f"$__value = {codes[0]}; "
                f"if (!{prefix}is_null_or_false($__value)) {echo} "
                "unset($__value);"
            )
        else:
            code = (
                f"$__values = [{', '.join(codes)}]; "
                f"if (!{prefix}is_array_null_or_false($__values)) "
                f"echo ' {name}='.{builder}($__values, {quote}, {flag}); "
                "unset($__values);"
            )
        return self._create_code(ctx, code)

    def _builder_name(self, ctx: CompileContext, name: str) -> str:
        if ctx.mode is not Mode.XML:
            if name == "class":
                return "build_class_value"
            if name == "style":
                return "build_style_value"
            if name.startswith("data-"):
                return "build_data_value"
        return "build_value"

    def _export_attribute_value(self, ctx: CompileContext, entry: AttributeEntry) -> str:
        value = (entry.value or "").strip()
        if is_variable(value) and entry.checked:
            return f"isset({value}) ? {value} : false"
        if is_scalar(value):
            return self._export_scalar(ctx, value)
        return value

    # =========================================================================
    # PHP literals
    # =========================================================================

    def _unquote(self, ctx: CompileContext, value: str) -> str:
        """Literal text of a scalar: quotes removed, escape sequences applied."""
        text = strip_quotes(value.strip())
        for sequence, replacement in ctx.config.escape_sequences.items():
            text = text.replace(sequence, replacement)
        return text

    def _export_scalar(self, ctx: CompileContext, value: str | None) -> str:
        """Export a literal as PHP: keywords and numbers as-is, text single-quoted."""
        if value is None:
            return "null"
        value = value.strip()
        if value.lower() in _KEYWORDS:
            return value.lower()
        if is_numeric(value):
            return value
        return "'" + self._interpolate(ctx, self._unquote(ctx, value), in_code=True) + "'"

    def _export_value(self, ctx: CompileContext, value: Any) -> str:
        if isinstance(value, (list, Mapping)):
            return self._export_array(ctx, value)
        if value is None:
            return "null"
        value = value.strip()
        if is_variable(value):
            return f"isset({value}) ? {value} : null"
        if is_scalar(value):
            return self._export_scalar(ctx, value)
        return value

    def _export_array(self, ctx: CompileContext, items: Mapping[str | int, Any] | list[Any]) -> str:
        """Export a PHP array literal; expressions inside are kept as code."""
        if isinstance(items, list):
            return "[" + ", ".join(self._export_value(ctx, value) for value in items) + "]"
        pairs = []
        for key, value in items.items():
            exported_key = str(key) if isinstance(key, int) else f"'{key}'"
            pairs.append(f"{exported_key} => {self._export_value(ctx, value)}")
        return "[" + ", ".join(pairs) + "]"
