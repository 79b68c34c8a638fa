"""Exception classes for jadeite.

Every stage of the pipeline raises a subclass of JadeiteError. Errors are
fail-fast: the first problem aborts the compile and no partial output is
produced.
"""

from __future__ import annotations


def _format_location(
    source_file: str | None,
    line: int | None,
    offset: int | None,
) -> str:
    location = ""
    if source_file:
        location = f"{source_file}:"
    if line is not None:
        location += f"{line}:"
        if offset is not None:
            location += f"{offset}:"
    if location:
        location = location.rstrip(":") + " "
    return location


class JadeiteError(Exception):
    """Base exception for all jadeite errors.

    Carries the position the error was raised at so callers can point
    template authors at the offending line.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize error with optional location.

        Args:
            message: Error description
            line: Line number where the error occurred (1-indexed)
            offset: Offset in that line (0-indexed)
            source_file: Path of the template being processed (optional)
        """
        self.message = message
        self.line = line
        self.offset = offset
        self.source_file = source_file
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"{_format_location(self.source_file, self.line, self.offset)}{self.message}"

    def with_source_file(self, source_file: str | None) -> JadeiteError:
        """Attach a source file if none was recorded yet.

        Returns:
            self, so the error can be re-raised inline
        """
        if source_file and not self.source_file:
            self.source_file = source_file
            self.args = (self._describe(),)
        return self


class LexError(JadeiteError):
    """Error while turning template text into tokens.

    Raised for unexpected characters, unclosed strings and brackets,
    malformed ``each`` statements and unterminated attribute blocks.
    """


class ParseError(JadeiteError):
    """Error while building the node tree.

    Raised when a token appears where the grammar does not allow it,
    e.g. a second tag name on an element or a nested mixin definition.
    """


class CompileError(JadeiteError):
    """Error during preprocessing or code generation.

    In addition to the location, records the kind of node that was being
    compiled when the error occurred.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        offset: int | None = None,
        source_file: str | None = None,
        node_kind: str | None = None,
    ) -> None:
        """Initialize compile error.

        Args:
            message: Error description
            line: Line number of the offending node (1-indexed)
            offset: Offset of the offending node (0-indexed)
            source_file: Path of the template being compiled (optional)
            node_kind: Kind of node being compiled, e.g. ``"element"``
        """
        self.node_kind = node_kind
        super().__init__(message, line, offset, source_file)

    def _describe(self) -> str:
        description = super()._describe()
        if self.node_kind:
            description += f" (in {self.node_kind})"
        return description
