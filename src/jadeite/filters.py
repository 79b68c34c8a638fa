"""Built-in filters.

A filter turns the raw text block under ``:name`` (or an included file of a
foreign type) into output. Every filter has the signature::

    filter(node, indent, newline, compiler) -> str | Node

``indent`` and ``newline`` are the compiler's current pretty-printing
strings; both are empty when pretty printing is off. A filter returning a
Node has that node compiled in its place.

Custom filters are registered through ``CompilerConfig(filters=...)``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

import mistune

if TYPE_CHECKING:
    from jadeite.compiler import Compiler
    from jadeite.nodes import Node

FilterFunction: TypeAlias = "Callable[[Node, str, str, Compiler], str | Node]"

# Statement delimiters used when the filter runs without a compiler
_DEFAULT_CODE_DELIMITERS = ("<?php ", "?>")


def filter_plain(node: Node, indent: str, newline: str, compiler: Compiler | None = None) -> str:
    """Emit the text block as-is, one trimmed line per source line.

    Lines stay separated even when pretty printing is off so that scripts
    relying on line breaks keep working.
    """
    lines = node.text().strip().split("\n")
    return (newline or "\n").join(indent + line.strip() for line in lines) + newline


def wrap_tag(tag: str, node: Node, indent: str, newline: str) -> str:
    return f"<{tag}>{newline}{filter_plain(node, indent, newline)}{indent}</{tag}>{newline}"


def filter_style(node: Node, indent: str, newline: str, compiler: Compiler | None = None) -> str:
    return wrap_tag("style", node, indent, newline)


def filter_script(node: Node, indent: str, newline: str, compiler: Compiler | None = None) -> str:
    return wrap_tag("script", node, indent, newline)


def filter_code(node: Node, indent: str, newline: str, compiler: Compiler | None = None) -> str:
    """Wrap the block in the configured statement delimiters, dropping
    delimiters already present."""
    start, end = compiler.config.statement_delimiters if compiler is not None else _DEFAULT_CODE_DELIMITERS
    start, end = start.strip(), end.strip()
    text = filter_plain(node, indent, newline)
    text = re.sub(rf"^\s*{re.escape(start)} ?", "", text, flags=re.IGNORECASE)
    text = re.sub(rf"{re.escape(end)}\s*$", "", text)
    separator = newline or "\n"
    return f"{indent}{start}{separator}{text}{separator}{indent}{end}{newline}"


def filter_cdata(node: Node, indent: str, newline: str, compiler: Compiler | None = None) -> str:
    return f"<![CDATA[{newline}{filter_plain(node, indent, newline)}{indent}]]>{newline}"


def filter_markdown(node: Node, indent: str, newline: str, compiler: Compiler | None = None) -> str:
    """Render the block as Markdown with mistune."""
    lines = [line.strip() for line in node.text().strip().split("\n")]
    rendered = mistune.html("\n".join(lines)).strip()
    return indent + rendered + newline


DEFAULT_FILTERS: dict[str, FilterFunction] = {
    "plain": filter_plain,
    "css": filter_style,
    "style": filter_style,
    "js": filter_script,
    "script": filter_script,
    "php": filter_code,
    "code": filter_code,
    "cdata": filter_cdata,
    "markdown": filter_markdown,
    "md": filter_markdown,
}

# File extension of a foreign include mapped to the filter applied to it
DEFAULT_FILTER_MAP: dict[str, str] = {
    "jade": "plain",
    "jd": "plain",
    "txt": "plain",
    "css": "css",
    "js": "js",
    "php": "php",
    "md": "markdown",
}

__all__ = [
    "FilterFunction",
    "DEFAULT_FILTERS",
    "DEFAULT_FILTER_MAP",
    "filter_plain",
    "filter_style",
    "filter_script",
    "filter_code",
    "filter_cdata",
    "filter_markdown",
    "wrap_tag",
]
