"""Plain-text dumps of token streams and node trees.

Debugging aids: ``dump_tokens`` prints one bracketed entry per token with
a line break after each NEWLINE, ``dump_tree`` prints one node per line,
indented two spaces per depth.

Example:
    >>> print(dump_tokens(Lexer("a(href='/') Home").tokenize()))
    [Tag a][(][Attr href='/' (escaped, checked)][)][Text Home]
    >>> print(dump_tree(parse("ul\\n  li Item")))
    [Document]
      [Element ul]
        [Element li]
          [Text 'Item']

"""

from __future__ import annotations

from collections.abc import Iterable

from jadeite.nodes import (
    Attribute,
    Block,
    Conditional,
    Element,
    Expression,
    Import,
    Mixin,
    MixinCall,
    Node,
    Text,
)
from jadeite.tokens import Token, TokenType
from jadeite.visitor import BaseVisitor

_TOKEN_SYMBOLS = {
    TokenType.INDENT: "->",
    TokenType.OUTDENT: "<-",
    TokenType.NEWLINE: "\\n",
    TokenType.ATTRIBUTE_START: "(",
    TokenType.ATTRIBUTE_END: ")",
}
_EMPTY = '""'


def _flags(escaped: bool, checked: bool) -> str:
    return f"({'escaped' if escaped else 'unescaped'}, {'checked' if checked else 'unchecked'})"


def _token_name(token_type: TokenType) -> str:
    """``MIXIN_CALL`` -> ``MixinCall``."""
    return token_type.name.title().replace("_", "")


def dump_token(token: Token) -> str:
    """Format a single token."""
    match token.type:
        case token_type if token_type in _TOKEN_SYMBOLS:
            text = _TOKEN_SYMBOLS[token_type]
        case TokenType.ATTRIBUTE:
            text = f"Attr {token.name or _EMPTY}={token.value or _EMPTY} {_flags(token.escaped, token.checked)}"
        case TokenType.TEXT:
            text = f"Text {token.value or ''}"
        case TokenType.EXPRESSION:
            text = f"Expr {token.value or _EMPTY} {_flags(token.escaped, token.checked)}"
        case _:
            detail = token.name if token.name is not None else token.subject
            text = _token_name(token.type) if detail is None else f"{_token_name(token.type)} {detail}"
    return f"[{text}]\n" if token.type is TokenType.NEWLINE else f"[{text}]"


def dump_tokens(tokens: Iterable[Token]) -> str:
    """Format a token stream, one line of output per source line."""
    return "".join(dump_token(token) for token in tokens)


def _format_attributes(attributes: list[Attribute]) -> str:
    parts = []
    for attribute in attributes:
        if attribute.name is None:
            parts.append(attribute.value or "")
        elif attribute.value is None:
            parts.append(attribute.name)
        else:
            parts.append(f"{attribute.name}={attribute.value}")
    return f" ({', '.join(parts)})" if parts else ""


class TreeDumper(BaseVisitor[None]):
    """Collect an indented outline of a node tree."""

    def __init__(self, indent: str = "  ") -> None:
        self._indent = indent
        self._depth = 0
        self.lines: list[str] = []

    def visit(self, node: Node) -> None:
        self._dispatch(node)
        self._depth += 1
        try:
            self._walk_children(node)
        finally:
            self._depth -= 1

    def _emit(self, text: str) -> None:
        self.lines.append(f"{self._indent * self._depth}[{text}]")

    def visit_default(self, node: Node) -> None:
        self._emit(type(node).__name__)

    def visit_element(self, node: Element) -> None:
        tag = node.tag if node.tag is not None else "(default)"
        self._emit(f"Element {tag}{_format_attributes(node.attributes)}")

    def visit_text(self, node: Text) -> None:
        self._emit(f"Text {node.value!r}")

    def visit_expression(self, node: Expression) -> None:
        self._emit(f"Expression {node.value} {_flags(node.escaped, node.checked)}")

    def visit_conditional(self, node: Conditional) -> None:
        subject = f" {node.subject}" if node.subject else ""
        self._emit(f"Conditional {node.condition_type}{subject}")

    def visit_import(self, node: Import) -> None:
        self._emit(f"Import {node.import_type} {node.path}")

    def visit_block(self, node: Block) -> None:
        name = node.name if node.name is not None else "(anonymous)"
        self._emit(f"Block {name} {node.mode or 'replace'}")

    def visit_mixin(self, node: Mixin) -> None:
        self._emit(f"Mixin {node.name}{_format_attributes(node.attributes)}")

    def visit_mixin_call(self, node: MixinCall) -> None:
        self._emit(f"MixinCall {node.name}{_format_attributes(node.attributes)}")


def dump_tree(node: Node, indent: str = "  ") -> str:
    """Format ``node`` and its descendants, one node per line."""
    dumper = TreeDumper(indent)
    dumper.visit(node)
    return "\n".join(dumper.lines)
