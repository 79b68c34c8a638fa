"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from jadeite.errors import LexError
from jadeite.lexer import Lexer
from jadeite.nodes import Node
from jadeite.parser import parse
from jadeite.tokens import TokenType

# Indentation depth of each line, relative to the line above
_depth_steps = st.lists(st.integers(min_value=-3, max_value=1), min_size=1, max_size=30)
_words = st.sampled_from(["div", "p", "li", "span", "a", "ul", "section"])


def _outline(steps: list[int], words: list[str]) -> str:
    lines = []
    depth = 0
    for step, word in zip(steps, words, strict=False):
        depth = max(0, depth + step)
        lines.append("  " * depth + word)
    return "\n".join(lines)


def _depth(node: Node) -> int:
    if not node.children:
        return 0
    return 1 + max(_depth(child) for child in node.children)


class TestIndentationInvariants:
    """INDENT and OUTDENT tokens always balance against the lexer level."""

    @given(_depth_steps, st.lists(_words, min_size=30, max_size=30))
    @settings(max_examples=100)
    def test_running_level_never_negative(self, steps: list[int], words: list[str]) -> None:
        lexer = Lexer(_outline(steps, words))
        level = 0
        for token in lexer.tokenize():
            if token.type is TokenType.INDENT:
                level += 1
            elif token.type is TokenType.OUTDENT:
                level -= 1
            assert level >= 0
            assert token.level == level
        assert level == lexer.level

    @given(_depth_steps, st.lists(_words, min_size=30, max_size=30))
    @settings(max_examples=100)
    def test_each_line_opens_at_most_one_level(self, steps: list[int], words: list[str]) -> None:
        indents_per_line: dict[int, int] = {}
        for token in Lexer(_outline(steps, words)).tokenize():
            if token.type is TokenType.INDENT:
                indents_per_line[token.line] = indents_per_line.get(token.line, 0) + 1
        assert all(count == 1 for count in indents_per_line.values())


class TestRobustness:
    """Arbitrary input either lexes or fails with a LexError."""

    @given(st.text(alphabet="ab.#()=:|-!$?'\" \t\n", max_size=200))
    @settings(max_examples=200)
    def test_terminates_or_raises_lex_error(self, source: str) -> None:
        try:
            tokens = list(Lexer(source).tokenize())
        except LexError:
            return
        assert all(token.line >= 1 for token in tokens)
        assert all(token.offset >= 0 for token in tokens)

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_arbitrary_text_only_raises_lex_error(self, source: str) -> None:
        try:
            list(Lexer(source).tokenize())
        except LexError as error:
            assert error.line >= 1


class TestParseDepth:
    @given(st.integers(min_value=1, max_value=40))
    @settings(max_examples=40)
    def test_nested_lines_nest_elements(self, depth: int) -> None:
        source = "\n".join("  " * level + "div" for level in range(depth))
        assert _depth(parse(source)) == depth
