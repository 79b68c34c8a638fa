"""Mixin definitions and calls.

A definition compiles to a closure stored in ``$__mixins``. The closure
merges its declared defaults with the call arguments and extracts them
into local variables. ``$__mixins`` is captured by reference, so a mixin
can call mixins defined after it.

Arguments are bound at compile time:

1. Named arguments bind by name; repeating a name collects a list.
2. Positional arguments fill the declared parameters that are still
   unbound, in declaration order.
3. A ``...rest`` parameter collects all remaining positional arguments.
4. Positional arguments left over after that get numeric keys.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from jadeite.compiler.attributes import AttributeEntry
from jadeite.nodes import Attribute, Mixin, MixinCall
from jadeite.stringbuilder import StringBuilder
from jadeite.utils.logger import get_logger

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext

logger = get_logger(__name__)

VARIADIC_PREFIX = "..."
_UNBOUND: Any = object()


@dataclass(slots=True)
class MixinDefinition:
    """A registered mixin and its compiled body (filled in after the document)."""

    node: Mixin
    body: str | None = None
    parameters: list[str] = field(default_factory=list)


def parameter_name(attribute: Attribute) -> str:
    """Declared parameter name without ``$`` (``...`` kept for variadics)."""
    name = attribute.name or ""
    if name.startswith(VARIADIC_PREFIX):
        return VARIADIC_PREFIX + name[len(VARIADIC_PREFIX):].lstrip("$")
    return name.lstrip("$")


def bind_arguments(parameters: Sequence[str], entries: Sequence[AttributeEntry]) -> dict[str | int, Any]:
    """Bind call arguments to declared parameters.

    Args:
        parameters: Declared parameter names in order (``...rest`` for a variadic)
        entries: Call arguments; positional ones have no name

    Returns:
        Argument name (or index, for overflow) to value or list of values.

    Example:
        >>> args = [AttributeEntry(None, "5")]
        >>> bind_arguments(["a", "b"], args)
        {'a': '5'}
    """
    arguments: dict[str | int, Any] = {}
    positional: list[str | None] = []
    for entry in entries:
        if entry.name is None:
            positional.append(entry.value)
        elif entry.name in arguments:
            existing = arguments[entry.name]
            arguments[entry.name] = [*existing, entry.value] if isinstance(existing, list) else [existing, entry.value]
        else:
            arguments[entry.name] = entry.value

    remaining = iter(positional)
    for parameter in parameters:
        if parameter.startswith(VARIADIC_PREFIX):
            rest = parameter[len(VARIADIC_PREFIX):]
            if rest not in arguments:
                arguments[rest] = list(remaining)
            continue
        if parameter in arguments:
            continue
        value = next(remaining, _UNBOUND)
        if value is _UNBOUND:
            break
        arguments[parameter] = value

    for index, value in enumerate(remaining):
        arguments[index] = value
    return arguments


class MixinCompilerMixin:
    """Mixin compiling ``+name(...)`` calls and the ``$__mixins`` closures."""

    def _compile_mixin_call(self, ctx: CompileContext, node: MixinCall) -> str:
        """Compile a mixin call.

        Raises:
            CompileError: If the mixin is not defined.
        """
        definition = ctx.mixins.get(node.name)
        if definition is None:
            raise self._error(ctx, f"Mixin {node.name} is not defined", node)
        if node.name not in ctx.called_mixins:
            ctx.called_mixins.append(node.name)

        arguments = bind_arguments(definition.parameters, self._collect_attributes(ctx, node))
        has_block = bool(node.children)

        sb = StringBuilder()
        if has_block:
            sb.append(self._create_code(
                ctx,
                "$__block = function(array $__arguments = []) use($__args, &$__mixins) {\n"
                "extract($__args);\n"
                "extract($__arguments);\n",
            ))
            sb.append(self._compile_children(ctx, node.children))
            sb.append(self._newline(ctx)).append(self._indent(ctx))
            sb.append(self._create_code(ctx, "};"))
            sb.append(self._newline(ctx)).append(self._indent(ctx))

        lines = [f"$__mixinCallArgs = {self._export_array(ctx, arguments)};"]
        if has_block:
            lines.append("$__mixinCallArgs['__block'] = isset($__block) ? $__block : null;")
        lines += [
            f"call_user_func($__mixins['{node.name}'], $__mixinCallArgs);",
            "unset($__mixinCallArgs);",
            "unset($__block);",
        ]
        sb.append(self._create_code(ctx, "\n".join(lines)))
        return sb.build()

    def _compile_mixins(self, ctx: CompileContext) -> str:
        """Compile the bodies of all mixins and emit the closures that are used.

        Bodies are compiled first so calls between mixins count as calls.
        """
        if not ctx.mixins:
            return ""
        for definition in ctx.mixins.values():
            definition.body = self._compile_children(ctx, definition.node.children, indent=False)

        newline = self._newline(ctx)
        sb = StringBuilder()
        sb.append(self._create_code(ctx, "$__args = isset($__args) ? $__args : [];")).append(newline)
        sb.append(self._create_code(ctx, "$__mixins = [];")).append(newline)

        for name, definition in ctx.mixins.items():
            if not ctx.config.compile_uncalled_mixins and name not in ctx.called_mixins:
                logger.debug("Skipping uncalled mixin %s", name)
                continue
            defaults = self._mixin_defaults(definition)
            sb.append(self._create_code(
                ctx,
                f"$__mixins['{name}'] = function(array $__arguments) use($__args, &$__mixins) {{\n"
                f"$__defaults = {self._export_array(ctx, defaults)};\n"
                "$__arguments = array_replace($__defaults, $__arguments);\n"
                "$__args = array_replace($__args, $__arguments);\n"
                "extract($__args);\n",
            ))
            sb.append(definition.body or "").append(newline)
            sb.append(self._create_code(ctx, "};")).append(newline)
        return sb.build()

    def _mixin_defaults(self, definition: MixinDefinition) -> dict[str | int, Any]:
        defaults: dict[str | int, Any] = {}
        for parameter, attribute in zip(definition.parameters, definition.node.attributes, strict=True):
            if parameter.startswith(VARIADIC_PREFIX):
                defaults[parameter[len(VARIADIC_PREFIX):]] = []
            else:
                defaults[parameter] = attribute.value
        return defaults
