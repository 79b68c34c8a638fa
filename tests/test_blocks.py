"""Tests for named block merging."""

import pytest

from jadeite import compile, parse
from jadeite.compiler import Compiler
from jadeite.compiler.core import CompileContext
from jadeite.config import get_compiler_config
from jadeite.nodes import Block

BASE = "block content\n  p A\n  p B\n"


class TestBlockModes:
    def test_lone_block_renders_its_children(self) -> None:
        assert compile("block content\n  p A") == "<p>A</p>"

    def test_append(self) -> None:
        source = BASE + "block append content\n  p C\n  p D"
        assert compile(source) == "<p>A</p><p>B</p><p>C</p><p>D</p>"

    def test_prepend(self) -> None:
        source = BASE + "block prepend content\n  p C\n  p D"
        assert compile(source) == "<p>C</p><p>D</p><p>A</p><p>B</p>"

    def test_replace(self) -> None:
        source = BASE + "block replace content\n  p C\n  p D"
        assert compile(source) == "<p>C</p><p>D</p>"

    def test_no_mode_replaces(self) -> None:
        source = BASE + "block content\n  p C"
        assert compile(source) == "<p>C</p>"

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [("append", "<p>A</p><p>B</p><p>C</p>"), ("prepend", "<p>C</p><p>A</p><p>B</p>")],
    )
    def test_shorthand(self, mode: str, expected: str) -> None:
        assert compile(BASE + f"{mode} content\n  p C") == expected

    def test_merges_apply_in_order(self) -> None:
        source = "block a\n  p 1\nappend a\n  p 2\nprepend a\n  p 0"
        assert compile(source) == "<p>0</p><p>1</p><p>2</p>"

    def test_blocks_with_other_names_are_untouched(self) -> None:
        source = "block a\n  p A\nblock b\n  p B\nappend a\n  p C"
        assert compile(source) == "<p>A</p><p>C</p><p>B</p>"

    def test_block_inside_element(self) -> None:
        source = "main\n  block content\n    p Default\nblock content\n  p Page"
        assert compile(source) == "<main><p>Page</p></main>"


class TestBlockPass:
    def test_merged_blocks_are_marked_and_detached(self) -> None:
        document = parse(BASE + "append content\n  p C")
        compiler = Compiler()
        ctx = CompileContext(config=get_compiler_config(), mode=get_compiler_config().mode)
        compiler._handle_blocks(ctx, document)
        master, merged = ctx.blocks
        assert master.ignored is False
        assert merged.ignored is True
        assert merged.parent is None
        assert list(document.find(Block)) == [master]
