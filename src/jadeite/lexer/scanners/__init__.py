"""Scanner mixins for the jadeite lexer.

Each mixin contributes ``_scan_*`` generators for one family of constructs.
The Lexer composes them and decides the order they are tried in.
"""

from __future__ import annotations

from jadeite.lexer.scanners.base import ScannerBase
from jadeite.lexer.scanners.control import ControlScannerMixin
from jadeite.lexer.scanners.element import ElementScannerMixin
from jadeite.lexer.scanners.template import TemplateScannerMixin
from jadeite.lexer.scanners.text import TextScannerMixin

__all__ = [
    "ControlScannerMixin",
    "ElementScannerMixin",
    "ScannerBase",
    "TemplateScannerMixin",
    "TextScannerMixin",
]
