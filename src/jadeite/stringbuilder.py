"""StringBuilder for compiled output.

Compiled fragments are collected in a list and joined once when a node's
output is complete.

Thread Safety:
StringBuilder instances are local to a single compile step.
No shared mutable state.

"""

from __future__ import annotations

class StringBuilder:
    """Efficient string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append("<p>").append("Hello").append("</p>")
        >>> sb.build()
        '<p>Hello</p>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a fragment; empty fragments are skipped.

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)
