"""Tests for built-in and custom filters."""

import pytest

from jadeite import CompileError, CompilerConfig, compile
from jadeite.filters import filter_code, filter_plain, wrap_tag
from jadeite.nodes import Element, Filter, Node, Text


def _block(*lines: str) -> Filter:
    node = Filter(name="plain")
    for line in lines:
        node.append(Text(value=line))
    return node


class TestBuiltinFilters:
    def test_css(self) -> None:
        assert compile(":css\n  body { color: red; }") == "<style>body { color: red; }</style>"

    def test_js(self) -> None:
        assert compile(":js\n  alert(1);") == "<script>alert(1);</script>"

    def test_plain_keeps_line_breaks(self) -> None:
        assert compile(":plain\n  a\n  b") == "a\nb"

    def test_cdata(self) -> None:
        assert compile(":cdata\n  x") == "<![CDATA[x]]>"

    def test_php(self) -> None:
        assert compile(":php\n  echo 1;") == "<?php\necho 1;\n?>"

    def test_php_uses_configured_delimiters(self) -> None:
        config = CompilerConfig(statement_delimiters=("{% ", "%}"))
        assert compile(":php\n  $a = 1;", config=config) == "{%\n$a = 1;\n%}"

    def test_php_drops_existing_delimiters(self) -> None:
        config = CompilerConfig(statement_delimiters=("{% ", "%}"))
        result = compile(":code\n  {% $a = 1; %}", config=config)
        assert result.count("{%") == 1
        assert result.count("%}") == 1
        assert "<?php" not in result

    @pytest.mark.parametrize("name", ["markdown", "md"])
    def test_markdown(self, name: str) -> None:
        assert compile(f":{name}\n  # Title") == "<h1>Title</h1>"

    def test_markdown_inline(self) -> None:
        assert compile(":markdown\n  *hi*") == "<p><em>hi</em></p>"

    def test_unknown_filter(self) -> None:
        with pytest.raises(CompileError, match="Unknown filter nope"):
            compile(":nope\n  x")


class TestCustomFilters:
    def test_string_result(self) -> None:
        def shout(node: Node, indent: str, newline: str, compiler: object) -> str:
            return node.text().upper()

        config = CompilerConfig(filters={"shout": shout})
        assert compile(":shout\n  hi", config=config) == "HI"

    def test_node_result_is_compiled(self) -> None:
        def bold(node: Node, indent: str, newline: str, compiler: object) -> Node:
            element = Element(tag="b")
            element.append(Text(value=node.text()))
            return element

        config = CompilerConfig(filters={"bold": bold})
        assert compile(":bold\n  hi", config=config) == "<b>hi</b>"

    def test_compiler_is_passed(self) -> None:
        seen: list[object] = []

        def spy(node: Node, indent: str, newline: str, compiler: object) -> str:
            seen.append(compiler)
            return ""

        compile(":spy\n  x", config=CompilerConfig(filters={"spy": spy}))
        assert len(seen) == 1
        assert hasattr(seen[0], "compile")


class TestFilterFunctions:
    def test_plain_indents_each_line(self) -> None:
        assert filter_plain(_block("a", "  b"), "  ", "\n") == "  a\n  b\n"

    def test_plain_without_newline(self) -> None:
        assert filter_plain(_block("a", "b"), "", "") == "a\nb"

    def test_code_without_compiler_uses_php_tags(self) -> None:
        assert filter_code(_block("<?php echo 1; ?>"), "", "") == "<?php\necho 1; \n?>"

    def test_wrap_tag(self) -> None:
        assert wrap_tag("style", _block("a"), "", "") == "<style>a</style>"
