"""Tests for ``#{}``, ``!{}``, ``#[]`` and ``![]`` interpolation."""

import pytest

from jadeite import compile
from jadeite.errors import CompileError


class TestCodeInterpolation:
    def test_escaped_variable(self) -> None:
        assert compile("p Hello #{$name}!") == (
            r"<p>Hello <?=htmlentities(isset($name) ? $name : '', \ENT_QUOTES, 'UTF-8')?>!</p>"
        )

    def test_unescaped_variable(self) -> None:
        assert compile("p !{$html}") == "<p><?=isset($html) ? $html : ''?></p>"

    def test_unchecked_variable(self) -> None:
        assert compile("p ?#{$x}") == r"<p><?=htmlentities($x, \ENT_QUOTES, 'UTF-8')?></p>"

    def test_array_access_is_a_variable(self) -> None:
        assert "isset($a['k']) ? $a['k'] : ''" in compile("p #{$a['k']}")

    def test_function_call_is_not_guarded(self) -> None:
        assert compile("p !{strtoupper($x)}") == "<p><?=strtoupper($x)?></p>"

    def test_nested_braces(self) -> None:
        assert compile("p !{fn(function() { return 1; })}") == "<p><?=fn(function() { return 1; })?></p>"

    def test_inside_escaped_text(self) -> None:
        result = compile("p! Hi #{$n}")
        assert result.startswith("<p><?=htmlentities('Hi '.(htmlentities(isset($n) ? $n : ''")

    def test_quotes_in_escaped_text(self) -> None:
        assert compile("p! it's") == r"<p><?=htmlentities('it\'s', \ENT_QUOTES, 'UTF-8')?></p>"


class TestMarkupInterpolation:
    def test_inline_element(self) -> None:
        assert compile("p Go #[a(href='/') home] now") == '<p>Go <a href="/">home</a> now</p>'

    def test_escaped_markup(self) -> None:
        assert compile("p ![b x]") == r"<p><?=htmlentities('<b>x</b>', \ENT_QUOTES, 'UTF-8')?></p>"

    def test_conditional_comment_is_preserved(self) -> None:
        source = "<!--[if IE]>x<![endif]-->"
        assert compile(source) == source


class TestInterpolationErrors:
    def test_unclosed_code(self) -> None:
        with pytest.raises(CompileError, match="Failed to interpolate value"):
            compile("p #{$x")

    def test_unclosed_markup(self) -> None:
        with pytest.raises(CompileError, match=r"\[ is not closed with \]"):
            compile("p #[b x")

    def test_error_location(self) -> None:
        with pytest.raises(CompileError) as info:
            compile("p\np #{$x", "page.jade")
        assert info.value.line == 2
        assert info.value.node_kind == "text"
        assert info.value.source_file == "page.jade"
