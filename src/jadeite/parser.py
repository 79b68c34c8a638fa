"""Indentation-driven parser producing a jadeite node tree.

Consumes the lexer's token stream lazily and builds a Document.

Thread Safety:
Parser instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from jadeite.lexer import Lexer
from jadeite.nodes import (
    Block,
    Case,
    Code,
    Comment,
    Conditional,
    Do,
    Doctype,
    Document,
    Each,
    Element,
    Expression,
    Filter,
    For,
    Import,
    Mixin,
    MixinCall,
    Node,
    Text,
    Variable,
    When,
    While,
)
from jadeite.parsing import ElementParsingMixin, TokenNavigationMixin, TreeBuildingMixin
from jadeite.tokens import Token, TokenType


class Parser(
    ElementParsingMixin,
    TreeBuildingMixin,
    TokenNavigationMixin,
):
    """Template parser.

    Usage:
        >>> doc = Parser("ul\\n  li Hello").parse()
        >>> doc.children[0].tag
        'ul'
        >>> doc.children[0].children[0].children[0].value
        'Hello'

    Thread Safety:
        Parser instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source_file",
        "_tokens",
        "_buffer",
        "_current_token",
        "_document",
        "_level",
        "_current",
        "_parent",
        "_last",
        "_expansion",
    )

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        indent_style: str | None = None,
        indent_width: int | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Template source text
            source_file: Optional source file path for error messages
            indent_style: Source indentation style, inferred when None
            indent_width: Source indentation width, inferred when None
        """
        self._source_file = source_file
        lexer = Lexer(
            source,
            indent_style=indent_style,
            indent_width=indent_width,
            source_file=source_file,
        )
        self._tokens = lexer.tokenize()
        self._buffer: list[Token] = []
        self._current_token: Token | None = None

        self._document = Document(line=1)
        self._level = 0
        self._current: Node | None = None
        self._parent: Node = self._document
        self._last: Node | None = None
        self._expansion: Node | None = None

    def parse(self) -> Document:
        """Parse the whole source into a Document.

        Returns:
            The root of the tree.

        Raises:
            LexError: On invalid input text.
            ParseError: On tokens the grammar does not allow where they are.
        """
        while (token := self._advance()) is not None:
            self._dispatch(token)
        return self._finish()

    def _dispatch(self, token: Token) -> None:
        match token.type:
            case TokenType.NEWLINE:
                self._handle_newline(token)
            case TokenType.INDENT:
                self._handle_indent(token)
            case TokenType.OUTDENT:
                self._handle_outdent(token)
            case TokenType.EXPANSION:
                self._handle_expansion(token)
            case TokenType.TAG:
                self._handle_tag(token)
            case TokenType.CLASS:
                self._handle_class(token)
            case TokenType.ID:
                self._handle_id(token)
            case TokenType.ATTRIBUTE_START:
                self._handle_attribute_start(token)
            case TokenType.ATTRIBUTE | TokenType.ATTRIBUTE_END:
                raise self._error("Attribute outside of an attribute block", token)
            case TokenType.ASSIGNMENT:
                self._handle_assignment(token)
            case TokenType.VARIABLE:
                self._handle_variable(token)
            case TokenType.TEXT:
                self._handle_text(token)
            case TokenType.EXPRESSION:
                self._handle_expression(token)
            case TokenType.CODE:
                self._handle_code(token)
            case TokenType.COMMENT:
                self._open(Comment(rendered=not token.hidden, line=token.line, offset=token.offset), token)
            case TokenType.FILTER:
                self._open(Filter(name=token.name or "", line=token.line, offset=token.offset), token)
            case TokenType.DOCTYPE:
                self._open(Doctype(name=token.name or "", line=token.line, offset=token.offset), token)
            case TokenType.IMPORT:
                self._handle_import(token)
            case TokenType.BLOCK:
                self._handle_block(token)
            case TokenType.MIXIN:
                self._handle_mixin(token)
            case TokenType.MIXIN_CALL:
                self._open(MixinCall(name=token.name or "", line=token.line, offset=token.offset), token)
            case TokenType.CONDITIONAL:
                self._open(
                    Conditional(
                        condition_type=token.mode or "if",
                        subject=token.subject,
                        line=token.line,
                        offset=token.offset,
                    ),
                    token,
                )
            case TokenType.CASE:
                self._open(Case(subject=token.subject, line=token.line, offset=token.offset), token)
            case TokenType.WHEN:
                self._open(
                    When(subject=token.subject, default=token.default, line=token.line, offset=token.offset),
                    token,
                )
            case TokenType.EACH:
                self._open(
                    Each(
                        subject=token.subject,
                        item_name=token.item_name or "",
                        key_name=token.key_name,
                        line=token.line,
                        offset=token.offset,
                    ),
                    token,
                )
            case TokenType.WHILE:
                self._open(While(subject=token.subject, line=token.line, offset=token.offset), token)
            case TokenType.DO:
                self._open(Do(subject=token.subject, line=token.line, offset=token.offset), token)
            case TokenType.FOR:
                self._open(For(subject=token.subject, line=token.line, offset=token.offset), token)

    # =========================================================================
    # Content
    # =========================================================================

    def _handle_text(self, token: Token) -> None:
        node = Text(value=token.value or "", escaped=token.escaped, line=token.line, offset=token.offset)
        if self._current is None:
            self._current = node
        else:
            self._current.append(node)

    def _handle_expression(self, token: Token) -> None:
        node = Expression(
            value=token.value or "",
            escaped=token.escaped,
            checked=token.checked,
            line=token.line,
            offset=token.offset,
        )
        if isinstance(self._current, (Element, Variable, MixinCall)):
            self._current.append(node)
        else:
            self._open(node, token)

    def _handle_code(self, token: Token) -> None:
        self._open(Code(value=token.value, block=token.block, line=token.line, offset=token.offset), token)

    # =========================================================================
    # Templates
    # =========================================================================

    def _handle_import(self, token: Token) -> None:
        if token.import_type == "extends" and self._current is not None:
            raise self._error("extends has to be the first thing on its line", token)
        self._open(
            Import(
                import_type=token.import_type or "include",
                path=token.path or "",
                filter=token.filter,
                line=token.line,
                offset=token.offset,
            ),
            token,
        )

    def _handle_block(self, token: Token) -> None:
        if not token.name and not self._inside_mixin():
            raise self._error("Blocks outside of mixins need a name", token)
        self._open(Block(name=token.name, mode=token.mode, line=token.line, offset=token.offset), token)

    def _handle_mixin(self, token: Token) -> None:
        if self._inside_mixin():
            raise self._error("Mixins can't be defined inside other mixins", token)
        self._open(Mixin(name=token.name or "", line=token.line, offset=token.offset), token)


def parse(source: str, source_file: str | None = None) -> Document:
    """Parse template source into a Document."""
    return Parser(source, source_file=source_file).parse()
