"""Template compiler producing PHP.

compile() runs the whole pipeline on one source string:

1. Parse the source into a Document.
2. Preprocess: splice imports, merge blocks, register mixins.
3. Generate code for the document.
4. Emit the mixin closures that are used in front of it, and the runtime
   helpers in front of everything in stand-alone mode.

Thread Safety:
All per-compile state is encapsulated in CompileContext, created fresh for
each compile() call. Multiple threads can safely share a single Compiler
instance and call compile() concurrently without synchronization.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from jadeite.compiler.attributes import AttributeCompilerMixin
from jadeite.compiler.control import ControlCompilerMixin
from jadeite.compiler.elements import ElementCompilerMixin
from jadeite.compiler.formatter import FormattingMixin
from jadeite.compiler.interpolation import InterpolationMixin
from jadeite.compiler.mixins import MixinCompilerMixin, MixinDefinition
from jadeite.compiler.preprocess import PreprocessMixin
from jadeite.compiler.resolver import PathResolver
from jadeite.compiler.runtime import render_runtime
from jadeite.config import CompilerConfig, Mode, get_compiler_config
from jadeite.errors import CompileError, JadeiteError
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
    MixinCall,
    Node,
    Text,
    Variable,
    When,
    While,
)
from jadeite.parser import Parser
from jadeite.stringbuilder import StringBuilder
from jadeite.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class CompileContext:
    """Per-compile mutable state.

    Created fresh for each compile() call, so sharing a Compiler between
    threads never shares this state.

    Attributes:
        config: Configuration of the compiling Compiler
        mode: Current output mode; a doctype switches it
        files: Stack of files being compiled, innermost last
        import_depth: Number of imports currently being resolved
        mixins: Registered mixin definitions by name
        called_mixins: Names of mixins that have been called, in call order
        blocks: All blocks found by the block pass
        level: Output indentation level
        iterator_id: Counter for ``$__iterator{n}`` variables of each loops

    """

    config: CompilerConfig
    mode: Mode
    files: list[Path] = field(default_factory=list)
    import_depth: int = 0
    mixins: dict[str, MixinDefinition] = field(default_factory=dict)
    called_mixins: list[str] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
    level: int = 0
    iterator_id: int = 0

    @property
    def current_file(self) -> Path | None:
        return self.files[-1] if self.files else None


class Compiler(
    PreprocessMixin,
    ElementCompilerMixin,
    AttributeCompilerMixin,
    ControlCompilerMixin,
    MixinCompilerMixin,
    InterpolationMixin,
    FormattingMixin,
):
    """Compile templates to PHP.

    Usage:
        >>> compiler = Compiler()
        >>> compiler.compile("a(href='/') Home")
        '<a href="/">Home</a>'

    Thread Safety:
        Multiple threads can safely share a single Compiler instance.
        Each compile() call creates an independent CompileContext.

    """

    __slots__ = ("_config", "_resolver")

    def __init__(self, config: CompilerConfig | None = None) -> None:
        """Initialize compiler.

        Args:
            config: Configuration to use; the context default when None
        """
        self._config = config if config is not None else get_compiler_config()
        self._resolver = PathResolver(self._config.search_paths, self._config.file_extensions)

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def compile(self, source: str, path: str | Path | None = None) -> str:
        """Compile template source to PHP.

        Args:
            source: Template source text
            path: File the source was read from; imports are resolved
                relative to it and errors name it

        Returns:
            The compiled PHP template.

        Raises:
            LexError: On invalid template text.
            ParseError: On tokens in places the grammar does not allow.
            CompileError: On failed imports, undefined mixins and invalid
                statements.
        """
        ctx = CompileContext(config=self._config, mode=self._config.mode)
        file_path = Path(path) if path is not None else None
        if file_path is not None:
            ctx.files.append(file_path)

        document = self._parse(ctx, source, file_path)
        self._handle_imports(ctx, document)
        self._handle_blocks(ctx, document)
        self._handle_mixins(ctx, document)

        body = self._compile_node(ctx, document)
        ctx.level = 0
        mixins = self._compile_mixins(ctx)

        sb = StringBuilder()
        if self._config.stand_alone:
            sb.append(render_runtime(self._config.runtime_namespace))
            sb.append(self._create_code(ctx, "namespace {"))
        sb.append(mixins)
        sb.append(body)
        if self._config.stand_alone:
            sb.append(self._create_code(ctx, "}"))
        return sb.build().strip()

    def compile_file(self, path: str | Path) -> str:
        """Compile the template file at ``path``.

        The path is resolved like an import: search paths first, then as
        given, trying each configured extension.

        Raises:
            CompileError: If the file does not exist.
        """
        full_path = self._resolver.resolve(str(path))
        if full_path is None:
            searched = ", ".join(str(p) for p in self._resolver.search_paths) or "the working directory"
            raise CompileError(f"File {path} not found in {searched}", source_file=str(path))
        logger.debug("Compiling %s", full_path)
        return self.compile(full_path.read_text(encoding="utf-8"), full_path)

    # =========================================================================
    # Parsing
    # =========================================================================

    def _parse(self, ctx: CompileContext, source: str, path: Path | None) -> Document:
        return Parser(
            source,
            source_file=str(path) if path is not None else None,
            indent_style=ctx.config.lexer_indent_style,
            indent_width=ctx.config.lexer_indent_width,
        ).parse()

    def _parse_fragment(self, ctx: CompileContext, source: str) -> Document:
        """Parse an interpolated ``#[...]`` fragment."""
        try:
            return self._parse(ctx, source, None)
        except JadeiteError as error:
            raise error.with_source_file(self._source_name(ctx)) from None

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _compile_node(self, ctx: CompileContext, node: Node) -> str:
        """Compile one node.

        Raises:
            CompileError: For node kinds that cannot be compiled.
        """
        match node:
            case Document():
                return self._compile_children(ctx, node.children, indent=False)
            case Element():
                return self._compile_element(ctx, node)
            case Text():
                return self._compile_text(ctx, node)
            case Expression():
                return self._compile_expression(ctx, node)
            case Code():
                return self._compile_code(ctx, node)
            case Comment():
                return self._compile_comment(ctx, node)
            case Filter():
                return self._compile_filter(ctx, node)
            case Doctype():
                return self._compile_doctype(ctx, node)
            case Variable():
                return self._compile_variable(ctx, node)
            case Block():
                return self._compile_block(ctx, node)
            case MixinCall():
                return self._compile_mixin_call(ctx, node)
            case Conditional():
                return self._compile_conditional(ctx, node)
            case Case():
                return self._compile_case(ctx, node)
            case When():
                if not isinstance(node.parent, Case):
                    raise self._error(ctx, "`when` can only be used inside `case`", node)
                return self._compile_when(ctx, node)
            case Each():
                return self._compile_each(ctx, node)
            case While():
                return self._compile_while(ctx, node)
            case Do():
                return self._compile_do(ctx, node)
            case For():
                return self._compile_for(ctx, node)
            case _:
                raise self._error(ctx, f"Can't compile a {node.kind} here", node)

    def _compile_children(
        self,
        ctx: CompileContext,
        nodes: Sequence[Node],
        *,
        indent: bool = True,
        inline: bool = False,
    ) -> str:
        """Compile a list of sibling nodes, each on its own line.

        Args:
            ctx: Current compile context
            nodes: Nodes to compile
            indent: Compile one output level deeper
            inline: A single node is compiled without line break and indentation
        """
        if indent:
            ctx.level += 1
        if inline and len(nodes) == 1:
            compiled = self._compile_node(ctx, nodes[0]).strip()
        else:
            sb = StringBuilder()
            for node in nodes:
                if isinstance(node, Text) and not node.value.strip() and not node.children:
                    continue
                # A named block's children start their own lines
                if not (isinstance(node, Block) and node.name):
                    sb.append(self._newline(ctx)).append(self._indent(ctx))
                sb.append(self._compile_node(ctx, node))
            compiled = sb.build()
        if indent:
            ctx.level -= 1
        return compiled

    # =========================================================================
    # Errors
    # =========================================================================

    def _source_name(self, ctx: CompileContext) -> str | None:
        current = ctx.current_file
        return str(current) if current is not None else None

    def _error(self, ctx: CompileContext, message: str, node: Node | None = None) -> CompileError:
        """Create a CompileError located at ``node`` in the current file."""
        return CompileError(
            message,
            line=node.line if node is not None else None,
            offset=node.offset if node is not None else None,
            source_file=self._source_name(ctx),
            node_kind=node.kind if node is not None else None,
        )
