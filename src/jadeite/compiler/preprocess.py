"""Tree rewriting that runs before code generation.

Passes, in order:

1. Imports: ``include``/``extends`` are replaced by the imported content.
   Template files are parsed and their children spliced in place; files of
   a foreign type become a Text node, wrapped in a Filter when one applies.
2. Blocks: all blocks sharing a name are merged into the first one.
3. Mixins: definitions are registered by name and detached from the tree.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from jadeite.compiler.mixins import MixinDefinition, parameter_name
from jadeite.nodes import Block, Filter, Import, Mixin, Node, Text
from jadeite.utils.logger import get_logger

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext

logger = get_logger(__name__)


class PreprocessMixin:
    """Mixin rewriting imports, blocks and mixin definitions in place.

    Required Host Attributes:
        - _resolver: PathResolver

    """

    # =========================================================================
    # Imports
    # =========================================================================

    def _handle_imports(self, ctx: CompileContext, document: Node) -> None:
        """Resolve every import below ``document``.

        Raises:
            CompileError: If imports are disabled, a file is missing or
                imports nest deeper than ``max_import_depth``.
        """
        for node in list(document.find(Import)):
            if not ctx.config.allow_imports:
                raise self._error(ctx, "Imports are not allowed in this compiler", node)
            self._handle_import(ctx, node)

    def _handle_import(self, ctx: CompileContext, node: Import) -> None:
        config = ctx.config
        path = node.path.strip()

        if node.import_type == "include":
            extension = PurePath(path).suffix.lstrip(".")
            filter_name = node.filter
            if not extension and filter_name:
                extension = next(
                    (ext for ext, name in config.filter_map.items() if name == filter_name),
                    "",
                )
            if extension and (f".{extension}" not in config.file_extensions or filter_name):
                self._include_foreign(ctx, node, path, extension, filter_name)
                return

        full_path = self._resolver.resolve(path, current_file=ctx.current_file)
        if full_path is None:
            raise self._error(ctx, self._not_found_message(ctx, path), node)
        if ctx.import_depth >= config.max_import_depth:
            raise self._error(
                ctx,
                f"Imports nest deeper than {config.max_import_depth} levels at {full_path}",
                node,
            )

        logger.debug("Importing %s (%s)", full_path, node.import_type)
        imported = self._parse(ctx, full_path.read_text(encoding="utf-8"), full_path)
        ctx.files.append(full_path)
        ctx.import_depth += 1
        try:
            self._handle_imports(ctx, imported)
        finally:
            ctx.import_depth -= 1
            ctx.files.pop()
        self._splice(node, list(imported.children))

    def _include_foreign(
        self,
        ctx: CompileContext,
        node: Import,
        path: str,
        extension: str,
        filter_name: str | None,
    ) -> None:
        """Replace ``node`` with the raw text of a non-template file."""
        full_path = self._resolver.resolve(path, f".{extension}", ctx.current_file)
        if full_path is None:
            raise self._error(ctx, self._not_found_message(ctx, path), node)
        filter_name = filter_name or ctx.config.filter_map.get(extension)
        logger.debug("Including %s as text (filter: %s)", full_path, filter_name)

        text = full_path.read_text(encoding="utf-8").replace("\r", "").replace("\0", "").strip()
        replacement: Node = Text(value=text, line=node.line, offset=node.offset)
        if filter_name:
            wrapper = Filter(name=filter_name, line=node.line, offset=node.offset)
            wrapper.append(replacement)
            replacement = wrapper
        self._splice(node, [replacement])

    def _splice(self, node: Node, replacements: list[Node]) -> None:
        """Put ``replacements`` where ``node`` is and drop ``node``."""
        parent = node.parent
        if parent is None:
            return
        for child in replacements:
            parent.insert_before(node, child)
        node.detach()

    def _not_found_message(self, ctx: CompileContext, path: str) -> str:
        searched = [str(directory) for directory in self._resolver.search_paths]
        if ctx.current_file is not None:
            searched.insert(0, str(Path(ctx.current_file).parent))
        locations = ", ".join(searched) if searched else "the working directory"
        return f"File {path} not found in {locations}"

    # =========================================================================
    # Blocks
    # =========================================================================

    def _handle_blocks(self, ctx: CompileContext, document: Node) -> None:
        """Merge same-named blocks into the first block of that name."""
        ctx.blocks = list(document.find(Block))
        for master in ctx.blocks:
            if not master.name or master.ignored:
                continue
            for block in ctx.blocks:
                if block is master or block.ignored or block.name != master.name:
                    continue
                self._merge_block(master, block)

    def _merge_block(self, master: Block, block: Block) -> None:
        mode = block.mode or "replace"
        logger.debug("Merging block %s (%s)", master.name, mode)
        block.detach()
        children = list(block.children)
        match mode:
            case "append":
                for child in children:
                    master.append(child)
            case "prepend":
                for index, child in enumerate(children):
                    if index == 0:
                        master.prepend(child)
                    else:
                        master.insert_after(children[index - 1], child)
            case _:
                for child in list(master.children):
                    master.remove(child)
                for child in children:
                    master.append(child)
        block.ignored = True

    # =========================================================================
    # Mixins
    # =========================================================================

    def _handle_mixins(self, ctx: CompileContext, document: Node) -> None:
        """Register and detach every mixin definition.

        Raises:
            CompileError: On a duplicate name unless ``replace_mixins`` is set.
        """
        for node in list(document.find(Mixin)):
            if node.name in ctx.mixins and not ctx.config.replace_mixins:
                raise self._error(ctx, f"Duplicate mixin name {node.name}", node)
            logger.debug("Registering mixin %s", node.name)
            node.detach()
            ctx.mixins[node.name] = MixinDefinition(
                node=node,
                parameters=[parameter_name(attribute) for attribute in node.attributes],
            )
