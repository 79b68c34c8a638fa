"""ContextVar-based compiler configuration for jadeite.

CompilerConfig is a frozen dataclass: one instance describes how templates
are lexed, which tables the compiler consults and how output is formatted.
A Compiler holds one config for its whole lifetime. The module-level
``jadeite.compile`` reads the context-local default when no config is
passed explicitly.

Thread Safety:
    CompilerConfig is immutable. The default lives in a ContextVar, so each
    thread (and each asyncio task) sees its own value without locks.

Usage:
    from jadeite.config import CompilerConfig, compiler_config_context

    with compiler_config_context(CompilerConfig(pretty=True)):
        html = jadeite.compile("p Hello")

    # Options from an external source (camelCase keys are accepted)
    config = CompilerConfig.from_dict({"pretty": True, "indentWidth": 4})

"""

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from jadeite.filters import DEFAULT_FILTER_MAP, DEFAULT_FILTERS, FilterFunction


class Mode(Enum):
    """Output mode; decides self-closing and valueless attribute rendering."""

    HTML = "html"
    XML = "xml"
    XHTML = "xhtml"


DEFAULT_DOCTYPES: dict[str, str] = {
    "5": "<!DOCTYPE html>",
    "html": "<!DOCTYPE html>",
    "xml": '<?xml version="1.0" encoding="utf-8"?>',
    "default": '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">',
    "transitional": '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">',
    "strict": '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">',
    "frameset": '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Frameset//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-frameset.dtd">',
    "1.1": '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">',
    "basic": '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML Basic 1.1//EN" "http://www.w3.org/TR/xhtml-basic/xhtml-basic11.dtd">',
    "mobile": '<!DOCTYPE html PUBLIC "-//WAPFORUM//DTD XHTML Mobile 1.2//EN" "http://www.openmobilealliance.org/tech/DTD/xhtml-mobile12.dtd">',
}

DEFAULT_SELF_CLOSING_TAGS = frozenset({
    "input", "br", "img", "link",
    "area", "base", "col", "command",
    "embed", "hr", "keygen", "meta",
    "param", "source", "track", "wbr",
})

DEFAULT_SELF_REPEATING_ATTRIBUTES = frozenset({"selected", "checked", "disabled"})

DEFAULT_ESCAPE_SEQUENCES: dict[str, str] = {
    "\\n": "\n",
    "\\r": "\r",
    "\\t": "\t",
}

# External option names (as documented for template authors) mapped to fields
_ALIASES: dict[str, str] = {
    "indentStyle": "indent_style",
    "indentWidth": "indent_width",
    "selfClosingTags": "self_closing_tags",
    "selfRepeatingAttributes": "self_repeating_attributes",
    "filterMap": "filter_map",
    "quoteStyle": "quote_style",
    "allowImports": "allow_imports",
    "replaceMixins": "replace_mixins",
    "compileUncalledMixins": "compile_uncalled_mixins",
    "defaultTag": "default_tag",
    "searchPaths": "search_paths",
    "paths": "search_paths",
    "fileExtension": "file_extensions",
    "extensions": "file_extensions",
    "xhtmlModes": "xhtml_doctypes",
    "xhtml_modes": "xhtml_doctypes",
    "escapeSequences": "escape_sequences",
    "escapeCharset": "escape_charset",
    "standAlone": "stand_alone",
    "echoXmlDoctype": "echo_xml_doctype",
    "maxImportDepth": "max_import_depth",
    "runtimeNamespace": "runtime_namespace",
}

_FROZENSET_FIELDS = frozenset({"self_closing_tags", "self_repeating_attributes"})
_TUPLE_FIELDS = frozenset({"search_paths", "file_extensions", "xhtml_doctypes"})


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Immutable compiler configuration.

    Attributes:
        pretty: Emit newlines and indentation between nodes
        indent_style: Character used for output indentation
        indent_width: Number of indent_style characters per level
        mode: Initial output mode (a doctype can switch it per compile)
        self_closing_tags: Void elements that never get a closing tag in HTML
        self_repeating_attributes: Boolean attributes (``checked`` etc.)
        doctypes: Doctype shortcut name to doctype markup
        xhtml_doctypes: Doctype names that switch output to XHTML
        filters: Filter name to filter callable
        filter_map: File extension to filter name, for foreign includes
        escape_sequences: Escapes honoured inside quoted literals
        quote_style: Quote character used around attribute values
        default_tag: Tag of elements written as ``.class`` or ``#id`` only
        escape_charset: Charset passed to ``htmlentities``
        allow_imports: Whether ``include``/``extends`` are permitted
        replace_mixins: Let a later mixin definition replace an earlier one
        compile_uncalled_mixins: Emit mixins nobody calls
        stand_alone: Prepend the runtime helper functions to the output
        echo_xml_doctype: Echo the xml declaration instead of writing it
        search_paths: Directories searched for imported templates
        file_extensions: Extensions of template files
        max_import_depth: Deepest allowed import nesting
        runtime_namespace: Namespace of the runtime helper functions
        statement_delimiters: Open/close pair around statements
        echo_delimiters: Open/close pair around echoed expressions
        comment_delimiters: Open/close pair around visible comments
        hidden_comment_delimiters: Open/close pair around hidden comments
        lexer_indent_style: Source indentation style; inferred when None
        lexer_indent_width: Source indentation width; inferred when None

    """

    pretty: bool = False
    indent_style: str = " "
    indent_width: int = 2
    mode: Mode = Mode.HTML
    self_closing_tags: frozenset[str] = DEFAULT_SELF_CLOSING_TAGS
    self_repeating_attributes: frozenset[str] = DEFAULT_SELF_REPEATING_ATTRIBUTES
    doctypes: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_DOCTYPES))
    xhtml_doctypes: tuple[str, ...] = (
        "default", "transitional", "strict", "frameset", "1.1", "basic", "mobile",
    )
    filters: Mapping[str, FilterFunction] = field(default_factory=lambda: dict(DEFAULT_FILTERS))
    filter_map: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_FILTER_MAP))
    escape_sequences: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_ESCAPE_SEQUENCES)
    )
    quote_style: str = '"'
    default_tag: str = "div"
    escape_charset: str = "UTF-8"
    allow_imports: bool = True
    replace_mixins: bool = False
    compile_uncalled_mixins: bool = False
    stand_alone: bool = False
    echo_xml_doctype: bool = False
    search_paths: tuple[str, ...] = ()
    file_extensions: tuple[str, ...] = (".jade", ".jd")
    max_import_depth: int = 64
    runtime_namespace: str = "\\Jadeite\\Runtime"
    statement_delimiters: tuple[str, str] = ("<?php ", "?>")
    echo_delimiters: tuple[str, str] = ("<?=", "?>")
    comment_delimiters: tuple[str, str] = ("<!-- ", " -->")
    hidden_comment_delimiters: tuple[str, str] = ("<?php /* ", " */ ?>")
    lexer_indent_style: str | None = None
    lexer_indent_width: int | None = None

    def __post_init__(self) -> None:
        if self.indent_style not in (" ", "\t"):
            raise ValueError(f"indent_style must be a space or a tab, got {self.indent_style!r}")
        if self.lexer_indent_style not in (None, " ", "\t"):
            raise ValueError(
                f"lexer_indent_style must be a space, a tab or None, got {self.lexer_indent_style!r}"
            )
        if self.quote_style not in ('"', "'"):
            raise ValueError(f"quote_style must be a quote character, got {self.quote_style!r}")
        if self.indent_width < 1:
            raise ValueError("indent_width must be at least 1")

    @property
    def runtime_prefix(self) -> str:
        """Fully qualified prefix for runtime helper calls, e.g. ``\\Ns\\``."""
        namespace = self.runtime_namespace.strip("\\")
        return f"\\{namespace}\\" if namespace else "\\"

    def filter_for(self, name: str) -> Callable[..., Any] | None:
        """Look up a filter by name."""
        return self.filters.get(name)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "CompilerConfig":
        """Create CompilerConfig from a dictionary.

        Accepts field names as well as the camelCase option names
        (``indentWidth``, ``selfClosingTags``, ``fileExtension``...).
        Unknown keys are silently ignored. Lists are converted to the
        immutable collection type of their field.

        Args:
            config_dict: Dictionary with config values

        Returns:
            New CompilerConfig instance with values from dict.

        Example:
            >>> config = CompilerConfig.from_dict({
            ...     "pretty": True,
            ...     "indentWidth": 4,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.indent_width
            4

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _ALIASES.get(key, key)
            if name not in valid_fields:
                continue
            if name == "mode" and isinstance(value, str):
                value = Mode(value.lower())
            elif name in _FROZENSET_FIELDS:
                value = frozenset(value)
            elif name in _TUPLE_FIELDS:
                value = (value,) if isinstance(value, str) else tuple(value)
            elif name == "filters":
                value = {**DEFAULT_FILTERS, **value}
            filtered[name] = value
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CompilerConfig = CompilerConfig()

_compiler_config: ContextVar[CompilerConfig] = ContextVar(
    "compiler_config",
    default=_DEFAULT_CONFIG,
)


def get_compiler_config() -> CompilerConfig:
    """Get the current default compiler configuration.

    Thread Safety:
        ContextVars are thread-local by design. Safe to call from any thread.

    """
    return _compiler_config.get()


def set_compiler_config(config: CompilerConfig) -> None:
    """Set the default compiler configuration for the current context.

    Args:
        config: CompilerConfig instance to use for this context.

    """
    _compiler_config.set(config)


def reset_compiler_config() -> None:
    """Reset to the module default configuration."""
    _compiler_config.set(_DEFAULT_CONFIG)


@contextmanager
def compiler_config_context(config: CompilerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: CompilerConfig to use within the context.

    Yields:
        None

    Example:
        >>> with compiler_config_context(CompilerConfig(pretty=True)):
        ...     html = jadeite.compile("p Hello")
        >>> # Previous config restored here

    Thread Safety:
        Only affects the current context. Restores the previous config even
        if an exception is raised.

    """
    token = _compiler_config.set(config)
    try:
        yield
    finally:
        _compiler_config.reset(token)


__all__ = [
    "CompilerConfig",
    "Mode",
    "DEFAULT_DOCTYPES",
    "DEFAULT_ESCAPE_SEQUENCES",
    "DEFAULT_SELF_CLOSING_TAGS",
    "DEFAULT_SELF_REPEATING_ATTRIBUTES",
    "get_compiler_config",
    "set_compiler_config",
    "reset_compiler_config",
    "compiler_config_context",
]
