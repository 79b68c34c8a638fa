"""Code generation for control statements.

Conditional chains share their statement delimiters: the closing brace
of a branch and the ``else``/``elseif`` that follows it are written into
one PHP block, so no markup can slip in between.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jadeite.nodes import Case, Conditional, Do, Each, For, When, While
from jadeite.stringbuilder import StringBuilder
from jadeite.utils.text import is_variable

if TYPE_CHECKING:
    from jadeite.compiler.core import CompileContext

_CHAINED = frozenset({"elseif", "else"})


def _guard(subject: str, fallback: str) -> str:
    """Wrap a bare variable subject in an isset check."""
    if is_variable(subject):
        return f"isset({subject}) ? {subject} : {fallback}"
    return subject


class ControlCompilerMixin:
    """Mixin compiling if/unless/elseif/else, case/when, each, while, do and for."""

    def _compile_conditional(self, ctx: CompileContext, node: Conditional) -> str:
        """Compile one branch of a conditional chain.

        Raises:
            CompileError: If ``else``/``elseif`` has no conditional before it.
        """
        open_, close = ctx.config.statement_delimiters
        condition_type = node.condition_type
        subject = (node.subject or "").strip()
        if subject == "block":
            subject = "$__block"
        subject = _guard(subject, "false")
        if condition_type == "unless":
            condition_type = "if"
            subject = f"!({subject})"

        continues = condition_type in _CHAINED
        if continues and not isinstance(node.prev_sibling(), Conditional):
            raise self._error(ctx, f"`{condition_type}` needs an if before it", node)
        following = node.next_sibling()
        continued = isinstance(following, Conditional) and following.condition_type in _CHAINED

        if condition_type == "else":
            head = " else {"
        elif continues:
            head = f" {condition_type} ({subject}) {{"
        else:
            head = f"{condition_type} ({subject}) {{"

        sb = StringBuilder()
        sb.append(self._create_code(ctx, head, "" if continues else open_))
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, "}", open_, "" if continued else close))
        return sb.build()

    def _compile_case(self, ctx: CompileContext, node: Case) -> str:
        """Compile a switch statement.

        Raises:
            CompileError: If the case has no children or a child that is
                not a ``when``.
        """
        if not node.children:
            raise self._error(ctx, "`case` needs at least one `when` child", node)
        for child in node.children:
            if not isinstance(child, When):
                raise self._error(ctx, "`case` can only have `when` children", node)

        open_, _ = ctx.config.statement_delimiters
        subject = _guard((node.subject or "").strip(), "null")
        # The first when continues this block, PHP allows no output before it
        sb = StringBuilder()
        sb.append(self._create_code(ctx, f"switch ({subject}) {{", open_, ""))
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, "}"))
        return sb.build()

    def _compile_when(self, ctx: CompileContext, node: When) -> str:
        open_, _ = ctx.config.statement_delimiters
        first = node.parent is not None and node.parent.children[0] is node
        if node.default:
            head = "default:"
        else:
            head = f"case {_guard((node.subject or '').strip(), 'null')}:"

        sb = StringBuilder()
        sb.append(self._create_code(ctx, head, "" if first else open_))
        if node.children:
            sb.append(self._compile_children(ctx, node.children))
            sb.append(self._newline(ctx)).append(self._indent(ctx))
            sb.append(self._create_code(ctx, "break;"))
        return sb.build()

    def _compile_each(self, ctx: CompileContext, node: Each) -> str:
        subject = _guard((node.subject or "").strip(), "[]")
        item = f"${node.item_name}"
        target = f"${node.key_name} => {item}" if node.key_name else item
        iterator = f"$__iterator{ctx.iterator_id}"
        ctx.iterator_id += 1

        sb = StringBuilder()
        sb.append(self._create_code(ctx, f"{iterator} = {subject};"))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, f"foreach ({iterator} as {target}) {{"))
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, "}"))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, f"unset({iterator});"))
        return sb.build()

    def _compile_while(self, ctx: CompileContext, node: While) -> str:
        """Compile a while loop, or the closing part of a do-while.

        Raises:
            CompileError: On a childless while without a do before it, or a
                while with children that closes a do.
        """
        _, close = ctx.config.statement_delimiters
        subject = _guard((node.subject or "").strip(), "null")
        closes_do = isinstance(node.prev_sibling(), Do)

        if closes_do:
            if node.children:
                raise self._error(ctx, "The while of a do-while can't have children", node)
            return self._create_code(ctx, f" while ({subject});", "", close)
        if not node.children:
            raise self._error(ctx, "A while without children needs a do before it", node)

        sb = StringBuilder()
        sb.append(self._create_code(ctx, f"while ({subject}) {{"))
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, "}"))
        return sb.build()

    def _compile_do(self, ctx: CompileContext, node: Do) -> str:
        """Compile the body of a do-while; the following while closes it.

        Raises:
            CompileError: If the do has a subject or no while follows it.
        """
        open_, _ = ctx.config.statement_delimiters
        if node.subject:
            raise self._error(ctx, "`do` can't have a subject", node)
        if not isinstance(node.next_sibling(), While):
            raise self._error(ctx, "`do` needs a `while` right after it", node)

        sb = StringBuilder()
        sb.append(self._create_code(ctx, "do {"))
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, "}", open_, ""))
        return sb.build()

    def _compile_for(self, ctx: CompileContext, node: For) -> str:
        sb = StringBuilder()
        sb.append(self._create_code(ctx, f"for ({(node.subject or '').strip()}) {{"))
        sb.append(self._compile_children(ctx, node.children))
        sb.append(self._newline(ctx)).append(self._indent(ctx))
        sb.append(self._create_code(ctx, "}"))
        return sb.build()
