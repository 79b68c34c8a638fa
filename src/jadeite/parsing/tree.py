"""Tree building for the jadeite parser.

Tokens on one source line build up a *current* node. A NEWLINE commits it
to the *parent* node. INDENT makes the last committed node the parent, and
OUTDENT moves the parent one step back up.

Expansions (``a: b: c``) are recorded as ``outer`` links while parsing, so
indentation keeps addressing the innermost node of a chain. ``_finish()``
folds the chains into real nesting once the whole token stream is read.
"""

from jadeite.nodes import Case, Document, Element, Mixin, Node, When
from jadeite.parsing.token_nav import TokenNavigationMixin
from jadeite.tokens import Token, TokenType


class TreeBuildingMixin(TokenNavigationMixin):
    """Mixin maintaining the parser's position in the tree.

    Required Host Attributes:
        - _document: Document
        - _level: int
        - _current: Node | None
        - _parent: Node
        - _last: Node | None
        - _expansion: Node | None

    """

    _document: Document
    _level: int
    _current: Node | None
    _parent: Node
    _last: Node | None
    _expansion: Node | None

    def _open(self, node: Node, token: Token) -> Node:
        """Make ``node`` the current node of the line.

        Raises:
            ParseError: If the line already has a current node.
        """
        if self._current is not None:
            raise self._error(
                f"Unexpected {node.kind}, the line already holds a {self._current.kind}",
                token,
            )
        self._current = node
        return node

    def _inside_mixin(self) -> bool:
        node: Node | None = self._parent
        while node is not None:
            if isinstance(node, Mixin):
                return True
            node = node.parent
        node = self._expansion
        while node is not None:
            if isinstance(node, Mixin):
                return True
            node = node.outer
        return False

    def _handle_newline(self, token: Token | None) -> None:
        if self._current is None and self._expansion is not None:
            # Trailing colon: the last node of the chain stands alone
            self._current, self._expansion = self._expansion, None

        current = self._current
        if current is None:
            return

        if self._expansion is not None:
            current.outer = self._expansion
            self._expansion = None

        if isinstance(current, When) and current.outer is None and not isinstance(self._parent, Case):
            raise self._error("`when` can only be used inside `case`", token)

        self._parent.append(current)
        self._last = current
        self._current = None

    def _handle_indent(self, token: Token) -> None:
        self._level += 1
        last = self._last
        if last is None:
            raise self._error("Unexpected indentation, there is no node to nest under", token)
        if last.childless:
            raise self._error(f"{last.kind.capitalize()} nodes can't have children", token)
        self._parent = last

    def _handle_outdent(self, token: Token) -> None:
        self._level -= 1
        parent = self._parent.parent
        if parent is None:
            raise self._error("Unexpected outdent, already at the top level", token)
        self._parent = parent

    def _handle_expansion(self, token: Token) -> None:
        current = self._current
        if current is None:
            raise self._error("Expansion needs a node in front of the colon", token)

        if isinstance(current, Element) and not token.has_space:
            tag = self._expect(TokenType.TAG, "Expected a tag name after the colon")
            if current.tag is None:
                raise self._error("A namespaced tag needs a tag name before the colon", token)
            current.tag = f"{current.tag}:{tag.name}"
            return

        if self._expansion is not None:
            current.outer = self._expansion
        self._expansion = current
        self._current = None

    def _finish(self) -> Document:
        """Commit the pending line and fold expansion chains into nesting."""
        self._handle_newline(self._current_token)
        self._resolve_expansions()
        return self._document

    def _resolve_expansions(self) -> None:
        for node in list(self._document.find(Node)):
            while node.outer is not None:
                outer, node.outer = node.outer, None
                parent = node.parent
                if parent is not None:
                    parent.insert_before(node, outer)
                outer.append(node)
                node = outer
