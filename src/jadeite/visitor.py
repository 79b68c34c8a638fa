"""Tree visitor for jadeite node trees.

Provides a base visitor class with match-based dispatch.

Example, collecting all mixin calls:

    class CallCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_mixin_call(self, node: MixinCall) -> None:
            self.names.append(node.name)

    collector = CallCollector()
    collector.visit(parse(source))

Attributes and assignments are not children and are not walked; visit
methods reach them through ``node.attributes`` and ``node.assignments``.

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from typing import Generic, TypeVar

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


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node kinds you care about.
    Unhandled kinds fall through to ``visit_default``. Children are walked
    automatically after the ``visit_*`` call, in document order.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node kinds without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Markup ----------------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_element(self, node: Element) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_expression(self, node: Expression) -> T:
        return self.visit_default(node)

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_filter(self, node: Filter) -> T:
        return self.visit_default(node)

    def visit_doctype(self, node: Doctype) -> T:
        return self.visit_default(node)

    def visit_variable(self, node: Variable) -> T:
        return self.visit_default(node)

    # -- Control statements ----------------------------------------------------

    def visit_conditional(self, node: Conditional) -> T:
        return self.visit_default(node)

    def visit_case(self, node: Case) -> T:
        return self.visit_default(node)

    def visit_when(self, node: When) -> T:
        return self.visit_default(node)

    def visit_each(self, node: Each) -> T:
        return self.visit_default(node)

    def visit_while(self, node: While) -> T:
        return self.visit_default(node)

    def visit_do(self, node: Do) -> T:
        return self.visit_default(node)

    def visit_for(self, node: For) -> T:
        return self.visit_default(node)

    # -- Templates -------------------------------------------------------------

    def visit_import(self, node: Import) -> T:
        return self.visit_default(node)

    def visit_block(self, node: Block) -> T:
        return self.visit_default(node)

    def visit_mixin(self, node: Mixin) -> T:
        return self.visit_default(node)

    def visit_mixin_call(self, node: MixinCall) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Element():
                return self.visit_element(node)
            case Text():
                return self.visit_text(node)
            case Expression():
                return self.visit_expression(node)
            case Code():
                return self.visit_code(node)
            case Comment():
                return self.visit_comment(node)
            case Filter():
                return self.visit_filter(node)
            case Doctype():
                return self.visit_doctype(node)
            case Variable():
                return self.visit_variable(node)
            case Conditional():
                return self.visit_conditional(node)
            case Case():
                return self.visit_case(node)
            case When():
                return self.visit_when(node)
            case Each():
                return self.visit_each(node)
            case While():
                return self.visit_while(node)
            case Do():
                return self.visit_do(node)
            case For():
                return self.visit_for(node)
            case Import():
                return self.visit_import(node)
            case Block():
                return self.visit_block(node)
            case Mixin():
                return self.visit_mixin(node)
            case MixinCall():
                return self.visit_mixin_call(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        # Copy: visit methods may detach the node they are given
        for child in list(node.children):
            self.visit(child)
