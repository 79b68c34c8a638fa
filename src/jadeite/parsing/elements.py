"""Element parsing for jadeite: tags, classes, ids, attribute blocks,
assignments and variables."""

from jadeite.nodes import Assignment, Attribute, Element, Mixin, MixinCall, Node, Variable
from jadeite.parsing.tree import TreeBuildingMixin
from jadeite.tokens import Token, TokenType

# Nodes that accept an attribute block
_ATTRIBUTE_TARGETS = (Element, Assignment, Mixin, MixinCall, Variable)


class ElementParsingMixin(TreeBuildingMixin):
    """Mixin turning element tokens into Element nodes and their attributes."""

    def _element(self, token: Token) -> Node:
        """Return the current node, creating an Element when the line has none."""
        if self._current is None:
            self._current = Element(line=token.line, offset=token.offset)
        return self._current

    def _handle_tag(self, token: Token) -> None:
        current = self._element(token)
        if not isinstance(current, Element):
            raise self._error(f"Tags can only be used on elements, not on a {current.kind}", token)
        if current.tag:
            raise self._error(f"The element already has a tag name ({current.tag})", token)
        current.tag = token.name

    def _handle_class(self, token: Token) -> None:
        self._add_literal_attribute(token, "class")

    def _handle_id(self, token: Token) -> None:
        self._add_literal_attribute(token, "id")

    def _add_literal_attribute(self, token: Token, name: str) -> None:
        current = self._element(token)
        if not isinstance(current, (Element, MixinCall)):
            raise self._error(
                f"{name.capitalize()} names can only be used on elements and mixin calls",
                token,
            )
        current.attributes.append(
            Attribute(
                name=name,
                value=f"'{token.name}'",
                line=token.line,
                offset=token.offset,
            )
        )

    def _handle_attribute_start(self, token: Token) -> None:
        current = self._element(token)
        if not isinstance(current, _ATTRIBUTE_TARGETS):
            raise self._error(f"Attributes can't be used on a {current.kind}", token)
        self._parse_attribute_block(current)

    def _parse_attribute_block(self, target: Node) -> None:
        """Consume ATTRIBUTE tokens up to ATTRIBUTE_END into ``target``.

        Raises:
            ParseError: On anything but attributes inside the block, an
                unnamed attribute on an element or mixin, or a missing end.
        """
        while (token := self._advance()) is not None:
            if token.type is TokenType.ATTRIBUTE_END:
                return
            if token.type is not TokenType.ATTRIBUTE:
                raise self._error(f"Unexpected {token.type.name.lower()} in attribute block", token)
            self._add_attribute(target, token)
        raise self._error("Unclosed attribute block")

    def _add_attribute(self, target: Node, token: Token) -> None:
        name, value = token.name, token.value
        if isinstance(target, MixinCall) and value is None:
            # +mixin(a, b): positional arguments
            name, value = None, name
        elif name is None and isinstance(target, (Element, Mixin)):
            raise self._error(f"Attributes on a {target.kind} need a name", token)

        target.attributes.append(  # type: ignore[attr-defined]
            Attribute(
                name=name,
                value=value,
                escaped=token.escaped,
                checked=token.checked,
                line=token.line,
                offset=token.offset,
            )
        )

    def _handle_assignment(self, token: Token) -> None:
        current = self._element(token)
        if not isinstance(current, (Element, MixinCall)):
            raise self._error("Assignments can only be used on elements and mixin calls", token)
        assignment = Assignment(name=token.name or "", line=token.line, offset=token.offset)
        current.assignments.append(assignment)
        self._expect(TokenType.ATTRIBUTE_START, "Assignments need an attribute block, e.g. &name(...)")
        self._parse_attribute_block(assignment)

    def _handle_variable(self, token: Token) -> None:
        self._open(Variable(name=token.name or "", line=token.line, offset=token.offset), token)
