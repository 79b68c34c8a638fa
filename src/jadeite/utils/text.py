"""Text helpers shared by the compiler passes.

Example:
    >>> from jadeite.utils.text import escape_html, is_variable
    >>> escape_html('<a href="x">')
    '&lt;a href=&quot;x&quot;&gt;'
    >>> is_variable("$user->name")
    True
"""

from __future__ import annotations

import html as html_module
import re

# A plain variable access: $name, $a['key'], $a->b, $a->{'b'}, $$dynamic
_VARIABLE = re.compile(
    r"^\$[a-z_$](\$?\w*|\[[^\]]+\]|->(\$?\w+|\{[^}]+\}))*$",
    re.IGNORECASE,
)

# A literal attribute value: bare word, number or quoted string
_SCALAR = re.compile(r"""^([a-z0-9_\-.]+|"[^"]*"|'[^']*')$""", re.IGNORECASE)

_NUMERIC = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def escape_html(text: str) -> str:
    """Escape HTML special characters, quotes included.

    Args:
        text: Raw text

    Returns:
        Text safe to place in element content or a quoted attribute.
    """
    return html_module.escape(text, quote=True)


def is_variable(code: str) -> bool:
    """Check whether ``code`` is a bare variable access."""
    return bool(_VARIABLE.match(code.strip()))


def is_scalar(value: str | None) -> bool:
    """Check whether ``value`` is a literal known at compile time."""
    return not value or bool(_SCALAR.match(value.strip()))


def is_numeric(value: str) -> bool:
    return bool(_NUMERIC.match(value))


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def quote_php_string(value: str, quote: str = "'") -> str:
    """Escape ``value`` for a PHP string literal delimited by ``quote``.

    Only the backslash and the delimiter are escaped, so interpolation
    markers stay readable.
    """
    return value.replace("\\", "\\\\").replace(quote, "\\" + quote)
