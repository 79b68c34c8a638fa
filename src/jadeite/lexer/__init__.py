"""Lexer package for jadeite.

Turns template source into a lazy stream of tokens.

Usage:
    >>> from jadeite.lexer import Lexer
    >>> [t.type.name for t in Lexer("p Hello").tokenize()]
    ['TAG', 'TEXT']

"""

from jadeite.lexer.core import Lexer
from jadeite.lexer.reader import Reader

__all__ = ["Lexer", "Reader"]
