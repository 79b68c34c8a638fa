"""Parsing subsystem for jadeite.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Lazy token stream traversal with lookahead
- `TreeBuildingMixin`: Line commits, indentation and expansion chains
- `ElementParsingMixin`: Tags, classes, ids, attribute blocks, assignments

Example:
    >>> from jadeite.parsing import (
    ...     TokenNavigationMixin,
    ...     TreeBuildingMixin,
    ...     ElementParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, TreeBuildingMixin, ElementParsingMixin):
    ...     pass

"""

from jadeite.parsing.elements import ElementParsingMixin
from jadeite.parsing.token_nav import TokenNavigationMixin
from jadeite.parsing.tree import TreeBuildingMixin

__all__ = [
    "TokenNavigationMixin",
    "TreeBuildingMixin",
    "ElementParsingMixin",
]
