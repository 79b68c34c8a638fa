"""
jadeite: Jade templates compiled to PHP

Compiles whitespace-significant Jade templates into PHP/HTML templates.
The pipeline is Lexer → Parser → Compiler; each stage can be used on its
own.

Quick Start:
    >>> import jadeite
    >>> jadeite.compile("a(href='/') Home")
    '<a href="/">Home</a>'

    >>> # Pretty-printed output
    >>> from jadeite import CompilerConfig
    >>> print(jadeite.compile("ul\\n  li Item", config=CompilerConfig(pretty=True)))
    <ul>
      <li>Item</li>
    </ul>

Templates on disk:
    >>> compiler = jadeite.Compiler(CompilerConfig(search_paths=("views",)))
    >>> php = compiler.compile_file("index")

Installation:
    pip install jadeite
"""

from collections.abc import Iterator
from pathlib import Path

from jadeite.compiler import Compiler, PathResolver, render_runtime
from jadeite.config import (
    CompilerConfig,
    Mode,
    compiler_config_context,
    get_compiler_config,
    reset_compiler_config,
    set_compiler_config,
)
from jadeite.dumper import dump_tokens, dump_tree
from jadeite.errors import CompileError, JadeiteError, LexError, ParseError
from jadeite.lexer import Lexer
from jadeite.nodes import (
    Assignment,
    Attribute,
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
from jadeite.parser import Parser
from jadeite.parser import parse as _parse
from jadeite.tokens import Token, TokenType
from jadeite.visitor import BaseVisitor

__version__ = "0.1.0"


def lex(source: str) -> Iterator[Token]:
    """Tokenize template source.

    Tokens are produced lazily; a LexError surfaces while iterating.

    Example:
        >>> [token.type.name for token in lex("p Hello")]
        ['TAG', 'TEXT']
    """
    return Lexer(source).tokenize()


def parse(source: str, source_file: str | None = None) -> Document:
    """Parse template source into a node tree.

    Args:
        source: Template source text
        source_file: Optional source file path for error messages

    Returns:
        Document root node

    Raises:
        LexError: On invalid template text.
        ParseError: On tokens in places the grammar does not allow.
    """
    return _parse(source, source_file=source_file)


def compile(
    source: str,
    path: str | Path | None = None,
    *,
    config: CompilerConfig | None = None,
) -> str:
    """Compile template source to PHP.

    Args:
        source: Template source text
        path: File the source was read from, used for relative imports
            and error messages
        config: Compiler configuration (uses the context default if None)

    Returns:
        The compiled PHP template.

    Example:
        >>> compile("input(type='checkbox', checked)")
        '<input type="checkbox" checked>'
    """
    return Compiler(config).compile(source, path)


def compile_file(path: str | Path, *, config: CompilerConfig | None = None) -> str:
    """Compile the template file at ``path``.

    Raises:
        CompileError: If the file cannot be found.
    """
    return Compiler(config).compile_file(path)


__all__ = [
    # Entry points
    "lex",
    "parse",
    "compile",
    "compile_file",
    "Compiler",
    "Lexer",
    "Parser",
    "PathResolver",
    "render_runtime",
    # Configuration
    "CompilerConfig",
    "Mode",
    "compiler_config_context",
    "get_compiler_config",
    "reset_compiler_config",
    "set_compiler_config",
    # Errors
    "JadeiteError",
    "LexError",
    "ParseError",
    "CompileError",
    # Tokens
    "Token",
    "TokenType",
    # Nodes
    "Node",
    "Document",
    "Element",
    "Attribute",
    "Assignment",
    "Text",
    "Expression",
    "Code",
    "Comment",
    "Filter",
    "Doctype",
    "Variable",
    "Conditional",
    "Case",
    "When",
    "Each",
    "While",
    "Do",
    "For",
    "Import",
    "Block",
    "Mixin",
    "MixinCall",
    # Debugging
    "BaseVisitor",
    "dump_tokens",
    "dump_tree",
]
