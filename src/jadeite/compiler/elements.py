"""Code generation for markup and content nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jadeite.config import Mode
from jadeite.nodes import (
    Block,
    Code,
    Comment,
    Doctype,
    Element,
    Expression,
    Filter,
    Node,
    Text,
    Variable,
)
from jadeite.stringbuilder import StringBuilder
from jadeite.utils.text import is_variable, quote_php_string

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext


class ElementCompilerMixin:
    """Mixin compiling elements, text, expressions, code, comments, filters,
    doctypes, variables and named blocks.

    Required Host Methods:
        - _compile_node(ctx, node) / _compile_children(ctx, nodes, ...)
        - _compile_attributes(ctx, node)
        - formatting and interpolation helpers

    """

    def _compile_element(self, ctx: CompileContext, node: Element) -> str:
        tag = node.tag or ctx.config.default_tag
        sb = StringBuilder()
        sb.append(f"<{tag}")
        sb.append(self._compile_attributes(ctx, node))

        if not node.children:
            if ctx.mode is not Mode.HTML:
                sb.append(" />")
            elif tag in ctx.config.self_closing_tags:
                sb.append(">")
            else:
                sb.append(f"></{tag}>")
            return sb.build()

        sb.append(">")
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(f"</{tag}>")
        return sb.build()

    def _compile_doctype(self, ctx: CompileContext, node: Doctype) -> str:
        """Emit the doctype and switch the output mode for the rest of the compile."""
        config = ctx.config
        name = node.name.strip()
        value = config.doctypes.get(name, f"<!DOCTYPE {name}>")

        if name == "xml":
            ctx.mode = Mode.XML
            if config.echo_xml_doctype:
                value = self._create_echo(ctx, f"'{quote_php_string(value)}'")
        elif name in config.xhtml_doctypes:
            ctx.mode = Mode.XHTML
        else:
            ctx.mode = Mode.HTML
        return value

    def _compile_text(self, ctx: CompileContext, node: Text) -> str:
        if node.escaped:
            literal = self._interpolate(ctx, node.value, in_code=True, node=node)
            text = self._create_echo(ctx, self._html_entities(ctx, f"'{literal}'"))
        else:
            text = self._interpolate(ctx, node.value, node=node)
        return text + self._compile_children(ctx, node.children, inline=True)

    def _compile_expression(self, ctx: CompileContext, node: Expression) -> str:
        value = node.value.strip().rstrip(";").rstrip()
        if is_variable(value) and node.checked:
            value = f"isset({value}) ? {value} : ''"
        if node.escaped:
            value = self._html_entities(ctx, value)
        return self._create_echo(ctx, value)

    def _compile_code(self, ctx: CompileContext, node: Code) -> str:
        if node.block:
            return self._create_code(ctx, node.text().strip())
        return self._create_code(ctx, node.value or "") + self._compile_children(ctx, node.children)

    def _compile_comment(self, ctx: CompileContext, node: Comment) -> str:
        content = self._compile_children(ctx, node.children, inline=True)
        return self._create_comment(ctx, content, hidden=not node.rendered)

    def _compile_filter(self, ctx: CompileContext, node: Filter) -> str:
        """Run a filter over the node's text.

        Raises:
            CompileError: If no filter of that name is configured.
        """
        function = ctx.config.filter_for(node.name)
        if function is None:
            raise self._error(ctx, f"Unknown filter {node.name}", node)
        result = function(node, self._indent(ctx), self._newline(ctx), self)
        if isinstance(result, Node):
            return self._compile_node(ctx, result)
        return str(result).strip()

    def _compile_variable(self, ctx: CompileContext, node: Variable) -> str:
        """Compile ``$name``: echo, ``$name = expr`` or ``$name(key=value)``.

        Raises:
            CompileError: On attributes combined with children, or a child
                that is not an expression.
        """
        name = f"${node.name}"
        if node.attributes:
            if node.children:
                raise self._error(ctx, "A variable with attributes can't have children", node)
            array: dict[str | int, object] = {}
            position = 0
            for attr in node.attributes:
                if attr.name is None or attr.value is None:
                    array[position] = attr.value if attr.value is not None else attr.name
                    position += 1
                elif attr.name in array:
                    existing = array[attr.name]
                    array[attr.name] = [*existing, attr.value] if isinstance(existing, list) else [existing, attr.value]
                else:
                    array[attr.name] = attr.value
            return self._create_code(
                ctx,
                f"$__value = {self._export_array(ctx, array)}; "
                f"{name} = isset({name}) ? array_replace_recursive({name}, $__value) : $__value; "
                "unset($__value);",
            )

        if not node.children:
            return self._create_echo(ctx, self._html_entities(ctx, name))

        if len(node.children) > 1 or not isinstance(node.children[0], Expression):
            raise self._error(ctx, "A variable can only have a single expression child", node)
        value = node.children[0].value.strip().rstrip(";").rstrip()
        return self._create_code(ctx, f"{name} = {value};")

    def _compile_block(self, ctx: CompileContext, node: Block) -> str:
        if not node.name:
            # The body passed to the enclosing mixin call
            return self._create_echo(
                ctx,
                "isset($__block) && $__block instanceof \\Closure"
                " ? $__block(array_replace($__args, $__arguments)) : ''",
            )
        return self._compile_children(ctx, node.children, indent=False)
