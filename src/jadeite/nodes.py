"""Template tree nodes for jadeite.

Nodes are mutable dataclasses with slots. The parser builds the tree and
the compiler's preprocessing passes rewrite it in place (splicing imports,
merging blocks, detaching mixins) before code generation walks it.

Node Hierarchy:
Node (base)
├── Document
├── Element, Attribute, Assignment
├── Text, Expression, Code, Comment, Filter, Doctype, Variable
├── Conditional, Case, When, Each, While, Do, For
└── Import, Block, Mixin, MixinCall

Ownership:
A node owns its ``children``. ``parent`` is a back-reference maintained
by the tree operations below and never set directly. ``outer`` records a
pending ``a: b`` expansion; the parser folds it into real nesting before
returning the tree.

Thread Safety:
Trees are mutable and owned by a single compile call. Do not share them
between threads.

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, TypeVar

N = TypeVar("N", bound="Node")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# =============================================================================
# Base Node
# =============================================================================


@dataclass(eq=False, slots=True)
class Node:
    """Base class for all tree nodes.

    Equality is identity: two nodes are only equal if they are the same
    object, which keeps ``index_of``/``remove`` unambiguous.

    """

    line: int = field(default=0, kw_only=True)
    offset: int = field(default=0, kw_only=True)
    children: list[Node] = field(default_factory=list, kw_only=True)
    parent: Node | None = field(default=None, kw_only=True, repr=False)
    outer: Node | None = field(default=None, kw_only=True, repr=False)

    # Kinds that may not receive children through indentation
    childless: ClassVar[bool] = False

    @property
    def kind(self) -> str:
        """Snake-case node kind, e.g. ``mixin_call``."""
        return _CAMEL_BOUNDARY.sub("_", type(self).__name__).lower()

    # -- Structure -------------------------------------------------------------

    def append(self, node: Node) -> Node:
        """Append ``node`` as last child, detaching it from any previous parent."""
        node.detach()
        self.children.append(node)
        node.parent = self
        return node

    def prepend(self, node: Node) -> Node:
        node.detach()
        self.children.insert(0, node)
        node.parent = self
        return node

    def insert_before(self, reference: Node, node: Node) -> Node:
        """Insert ``node`` directly before the child ``reference``.

        Raises:
            ValueError: If ``reference`` is not a child of this node.
        """
        node.detach()
        self.children.insert(self.index_of(reference), node)
        node.parent = self
        return node

    def insert_after(self, reference: Node, node: Node) -> Node:
        node.detach()
        self.children.insert(self.index_of(reference) + 1, node)
        node.parent = self
        return node

    def remove(self, node: Node) -> Node:
        """Remove the child ``node`` and clear its parent."""
        del self.children[self.index_of(node)]
        node.parent = None
        return node

    def detach(self) -> Node:
        """Remove this node from its parent, if it has one."""
        if self.parent is not None:
            self.parent.remove(self)
        return self

    def index_of(self, node: Node) -> int:
        for index, child in enumerate(self.children):
            if child is node:
                return index
        raise ValueError(f"{node.kind} is not a child of {self.kind}")

    def prev_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        index = self.parent.index_of(self)
        return self.parent.children[index - 1] if index > 0 else None

    def next_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = self.parent.index_of(self)
        return siblings[index + 1] if index + 1 < len(siblings) else None

    # -- Queries ---------------------------------------------------------------

    def find(self, kind: type[N]) -> Iterator[N]:
        """Yield all descendants of ``kind`` in depth-first pre-order.

        The walk reads ``children`` lazily; materialize the result before
        mutating the tree.
        """
        for child in self.children:
            if isinstance(child, kind):
                yield child
            yield from child.find(kind)

    def text(self, indent_style: str = "  ", newline: str = "\n", level: int = 0) -> str:
        """Join the values of direct and nested text children into lines.

        Nested text is indented one ``indent_style`` per level.
        """
        indent = indent_style * level
        lines: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                lines.append(indent + child.value)
                nested = child.text(indent_style, newline, level + 1)
                if nested:
                    lines.append(nested)
        return newline.join(lines)


# =============================================================================
# Document and elements
# =============================================================================


@dataclass(eq=False, slots=True)
class Document(Node):
    """Root of a template tree."""


@dataclass(eq=False, slots=True)
class Attribute(Node):
    """One ``name=value`` entry of an attribute block.

    ``name`` is None for positional mixin arguments.
    """

    name: str | None = None
    value: str | None = None
    escaped: bool = True
    checked: bool = True


@dataclass(eq=False, slots=True)
class Element(Node):
    """An HTML/XML element: ``tag.class#id(attrs)``."""

    tag: str | None = None
    attributes: list[Attribute] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)


@dataclass(eq=False, slots=True)
class Assignment(Node):
    """``&name(...)``: attributes spread onto the element they follow."""

    name: str = ""
    attributes: list[Attribute] = field(default_factory=list)


# =============================================================================
# Text and code
# =============================================================================


@dataclass(eq=False, slots=True)
class Text(Node):
    """Literal text; may contain interpolations."""

    value: str = ""
    escaped: bool = False


@dataclass(eq=False, slots=True)
class Expression(Node):
    """``= expr``: echo the result of an expression."""

    childless: ClassVar[bool] = True

    value: str = ""
    escaped: bool = True
    checked: bool = True


@dataclass(eq=False, slots=True)
class Code(Node):
    """``- code`` or a ``-`` block of raw statements."""

    value: str | None = None
    block: bool = False


@dataclass(eq=False, slots=True)
class Comment(Node):
    """``//`` comment; hidden comments are kept out of the markup."""

    rendered: bool = True


@dataclass(eq=False, slots=True)
class Filter(Node):
    """``:name`` text block handed to a filter."""

    name: str = ""


@dataclass(eq=False, slots=True)
class Doctype(Node):
    childless: ClassVar[bool] = True

    name: str = ""


@dataclass(eq=False, slots=True)
class Variable(Node):
    """``$name``: echo, assign or merge attributes into a variable."""

    name: str = ""
    attributes: list[Attribute] = field(default_factory=list)


# =============================================================================
# Control statements
# =============================================================================


@dataclass(eq=False, slots=True)
class Conditional(Node):
    """``if``, ``unless``, ``elseif`` or ``else``."""

    condition_type: str = "if"
    subject: str | None = None


@dataclass(eq=False, slots=True)
class Case(Node):
    subject: str | None = None


@dataclass(eq=False, slots=True)
class When(Node):
    """A ``when`` branch of a ``case``; ``default`` when ``default`` is set."""

    subject: str | None = None
    default: bool = False


@dataclass(eq=False, slots=True)
class Each(Node):
    subject: str | None = None
    item_name: str = ""
    key_name: str | None = None


@dataclass(eq=False, slots=True)
class While(Node):
    subject: str | None = None


@dataclass(eq=False, slots=True)
class Do(Node):
    subject: str | None = None


@dataclass(eq=False, slots=True)
class For(Node):
    subject: str | None = None


# =============================================================================
# Templates
# =============================================================================


@dataclass(eq=False, slots=True)
class Import(Node):
    """``extends path`` or ``include[:filter] path``."""

    childless: ClassVar[bool] = True

    import_type: str = "include"
    path: str = ""
    filter: str | None = None


@dataclass(eq=False, slots=True)
class Block(Node):
    """A named block (or the anonymous block of a mixin).

    ``mode`` is ``append``, ``prepend``, ``replace`` or None (replace).
    Blocks merged into another block are marked ``ignored``.
    """

    name: str | None = None
    mode: str | None = None
    ignored: bool = False


@dataclass(eq=False, slots=True)
class Mixin(Node):
    """``mixin name(params)``; parameters are attributes with defaults."""

    name: str = ""
    attributes: list[Attribute] = field(default_factory=list)


@dataclass(eq=False, slots=True)
class MixinCall(Node):
    """``+name(args)``; children become the call's block."""

    name: str = ""
    attributes: list[Attribute] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)


__all__ = [
    "Assignment",
    "Attribute",
    "Block",
    "Case",
    "Code",
    "Comment",
    "Conditional",
    "Do",
    "Doctype",
    "Document",
    "Each",
    "Element",
    "Expression",
    "Filter",
    "For",
    "Import",
    "Mixin",
    "MixinCall",
    "Node",
    "Text",
    "Variable",
    "When",
    "While",
]
