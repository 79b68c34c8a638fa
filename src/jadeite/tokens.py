"""Token and TokenType definitions for the jadeite lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, a source position and the indentation level the
lexer was at when it emitted the token. Kind-specific payload (a tag name,
an attribute value, a control-statement subject...) lives in optional
fields that stay None for kinds that don't use them.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by the lexer.

    Organized by category:
    - Layout (indentation and line breaks)
    - Elements and attributes
    - Text and embedded code
    - Control statements
    - Templates (imports, blocks, mixins)

    """

    # Layout
    NEWLINE = auto()
    INDENT = auto()
    OUTDENT = auto()

    # Elements and attributes
    TAG = auto()  # div
    CLASS = auto()  # .name
    ID = auto()  # #name
    ATTRIBUTE_START = auto()  # (
    ATTRIBUTE = auto()  # name=value
    ATTRIBUTE_END = auto()  # )
    ASSIGNMENT = auto()  # &attributes
    EXPANSION = auto()  # a: b

    # Text and embedded code
    TEXT = auto()
    EXPRESSION = auto()  # = $value
    CODE = auto()  # - $statement
    COMMENT = auto()  # // or //-
    FILTER = auto()  # :name
    DOCTYPE = auto()  # doctype html
    VARIABLE = auto()  # $name

    # Control statements
    CONDITIONAL = auto()  # if / unless / elseif / else
    CASE = auto()
    WHEN = auto()  # when / default
    EACH = auto()
    WHILE = auto()
    DO = auto()
    FOR = auto()

    # Templates
    IMPORT = auto()  # extends / include
    BLOCK = auto()  # block / append / prepend / replace
    MIXIN = auto()  # mixin name
    MIXIN_CALL = auto()  # +name


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        line: Line number (1-indexed)
        offset: Offset within the line (0-indexed)
        level: Indentation level of the lexer when the token was emitted
        name: Tag, class, id, attribute, mixin, block, filter or variable name
        value: Attribute value, text, expression or code
        subject: Subject expression of a control statement
        mode: Conditional type (``if``...) or block mode (``append``...)
        escaped: Output should be HTML-escaped
        checked: Variable values get an ``isset`` guard
        hidden: Comment is not rendered into the output
        item_name: Item variable of an ``each`` loop
        key_name: Key variable of an ``each`` loop
        import_type: ``extends`` or ``include``
        path: Path of an import
        filter: Filter applied to an import
        has_space: An expansion colon was followed by whitespace
        block: Code token starts a multi-line block
        default: ``when`` token is the ``default`` branch

    """

    type: TokenType
    line: int
    offset: int
    level: int = 0
    name: str | None = None
    value: str | None = None
    subject: str | None = None
    mode: str | None = None
    escaped: bool = False
    checked: bool = True
    hidden: bool = False
    item_name: str | None = None
    key_name: str | None = None
    import_type: str | None = None
    path: str | None = None
    filter: str | None = None
    has_space: bool = False
    block: bool = False
    default: bool = False

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.name if self.name is not None else self.value
        if val is None:
            val = self.subject if self.subject is not None else self.path
        if val is not None and len(val) > 20:
            val = val[:17] + "..."
        if val is None:
            return f"Token({self.type.name}, {self.line}:{self.offset})"
        return f"Token({self.type.name}, {val!r}, {self.line}:{self.offset})"
