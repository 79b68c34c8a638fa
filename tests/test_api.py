"""Tests for the high-level jadeite API."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st


class TestLexFunction:
    """Tests for the lex() function."""

    def test_tokens_are_lazy(self) -> None:
        """Test that lex() returns an iterator."""
        from jadeite import TokenType, lex

        tokens = lex("p Hello")
        assert next(tokens).type is TokenType.TAG
        assert next(tokens).type is TokenType.TEXT

    def test_token_positions(self) -> None:
        """Test that tokens record 1-indexed lines."""
        from jadeite import lex

        assert [token.line for token in lex("p\nbr")] == [1, 1, 2]


class TestParseFunction:
    """Tests for the parse() function."""

    def test_parse_element(self) -> None:
        from jadeite import Document, Element, parse

        doc = parse("p Hello")
        assert isinstance(doc, Document)
        assert isinstance(doc.children[0], Element)
        assert doc.children[0].text() == "Hello"

    def test_parse_with_source_file(self) -> None:
        """Test that the source file reaches parse errors."""
        import pytest

        from jadeite import ParseError, parse

        with pytest.raises(ParseError) as info:
            parse("  p", source_file="test.jade")
        assert info.value.source_file == "test.jade"


class TestCompileFunction:
    """Tests for the compile() function."""

    def test_compile_link(self) -> None:
        from jadeite import compile

        assert compile("a(href='/') Home") == '<a href="/">Home</a>'

    def test_compile_checkbox(self) -> None:
        from jadeite import compile

        assert compile("input(type='checkbox', checked)") == '<input type="checkbox" checked>'

    def test_compile_file(self, tmp_path: Path) -> None:
        """Test compile_file() resolves extensions."""
        from jadeite import compile_file

        (tmp_path / "index.jade").write_text("h1 Hi", encoding="utf-8")
        assert compile_file(tmp_path / "index") == "<h1>Hi</h1>"

    def test_compile_file_with_config(self, tmp_path: Path) -> None:
        from jadeite import CompilerConfig, compile_file

        (tmp_path / "index.jade").write_text("ul\n  li", encoding="utf-8")
        config = CompilerConfig(pretty=True, search_paths=(str(tmp_path),))
        assert compile_file("index", config=config) == "<ul>\n  <li></li>\n</ul>"


class TestCompilerClass:
    """Tests for the Compiler class."""

    def test_reusable(self) -> None:
        from jadeite import Compiler

        compiler = Compiler()
        assert compiler.compile("p") == "<p></p>"
        assert compiler.compile("br") == "<br>"

    def test_doctype_does_not_leak_between_compiles(self) -> None:
        """Test that the output mode is per compile."""
        from jadeite import Compiler

        compiler = Compiler()
        assert compiler.compile("doctype xml\nbr").endswith("<br />")
        assert compiler.compile("br") == "<br>"

    def test_shared_across_threads(self) -> None:
        from jadeite import Compiler

        compiler = Compiler()
        sources = [f"p= $item{i}\nmixin m{i}\n  b {i}\n+m{i}" for i in range(20)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(compiler.compile, sources))
        expected = [compiler.compile(source) for source in sources]
        assert results == expected
        assert all(f"$item{i}" in result for i, result in enumerate(results))


class TestModuleExports:
    """Tests for the package surface."""

    def test_version(self) -> None:
        import jadeite

        assert jadeite.__version__ == "0.1.0"

    def test_all_names_exist(self) -> None:
        import jadeite

        for name in jadeite.__all__:
            assert hasattr(jadeite, name), name


class TestLiteralMarkup:
    """Markup lines pass through unchanged."""

    @given(st.text(alphabet="abcdefghij ,.", min_size=1, max_size=30).map(str.strip).filter(bool))
    def test_markup_line_is_copied(self, word: str) -> None:
        from jadeite import compile

        source = f"<p>{word}</p>"
        assert compile(source) == source
