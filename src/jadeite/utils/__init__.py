"""Utility modules for jadeite.

Provides:
- logger: get_logger for logging
- text: escaping and literal classification helpers
"""

from jadeite.utils.logger import get_logger
from jadeite.utils.text import escape_html, is_scalar, is_variable

__all__ = [
    "escape_html",
    "get_logger",
    "is_scalar",
    "is_variable",
]
