"""Tests for attribute compilation: literal markup, runtime builders,
keywords and assignments."""

import pytest

from jadeite import CompilerConfig, compile
from jadeite.errors import CompileError


class TestLiteralAttributes:
    def test_quoted_value(self) -> None:
        assert compile("a(href='/')") == '<a href="/"></a>'

    def test_valueless_attribute_in_html(self) -> None:
        assert compile("input(type='checkbox', checked)") == '<input type="checkbox" checked>'

    def test_repeated_class_is_joined(self) -> None:
        assert compile('div(class="a", class="b")') == '<div class="a b"></div>'

    def test_class_shorthand_merges_with_attribute(self) -> None:
        assert compile(".a(class='b')") == '<div class="a b"></div>'

    def test_style_values_are_joined(self) -> None:
        assert compile("p(style='color: red', style='margin: 0')") == (
            '<p style="color: red; margin: 0"></p>'
        )

    def test_data_attribute_with_several_values(self) -> None:
        assert compile("div(data-foo='a', data-foo='b')") == (
            '<div data-foo="[&quot;a&quot;, &quot;b&quot;]"></div>'
        )

    def test_data_json_follows_quote_style(self) -> None:
        config = CompilerConfig(quote_style="'")
        assert compile("div(data-foo='a', data-foo='b')", config=config) == (
            """<div data-foo='["a", "b"]'></div>"""
        )

    def test_unescaped_data_json_cannot_close_the_attribute(self) -> None:
        config = CompilerConfig(quote_style="'")
        result = compile("div(data-x!=\"it's\", data-x!='b')", config=config)
        assert result == """<div data-x='["it&#39;s", "b"]'></div>"""

    def test_data_attribute_with_one_value(self) -> None:
        assert compile("div(data-foo='a')") == '<div data-foo="a"></div>'

    def test_numbers(self) -> None:
        assert compile("input(value=5)") == '<input value="5">'

    def test_values_are_escaped(self) -> None:
        assert compile("a(title='<x>')") == '<a title="&lt;x&gt;"></a>'

    def test_unescaped_values(self) -> None:
        assert compile("a(title!='<x>')") == '<a title="<x>"></a>'

    def test_single_quote_style(self) -> None:
        config = CompilerConfig(quote_style="'")
        assert compile("a(href='/')", config=config) == "<a href='/'></a>"

    def test_interpolation_in_value(self) -> None:
        assert compile("a(title='Hi #{$name}')") == (
            '<a title="Hi '
            r"<?=htmlentities(isset($name) ? $name : '', \ENT_QUOTES, 'UTF-8')?>"
            '"></a>'
        )

    def test_xml_mode_concatenates_classes(self) -> None:
        assert compile("doctype xml\nitem(class='a', class='b')").endswith('<item class="ab" />')


class TestKeywords:
    def test_true_renders_bare_in_html(self) -> None:
        assert compile("input(disabled=true)") == "<input disabled>"

    def test_true_repeats_name_in_xhtml(self) -> None:
        assert compile("doctype strict\ninput(disabled=true)").endswith('<input disabled="disabled" />')

    @pytest.mark.parametrize("keyword", ["false", "null", "FALSE"])
    def test_suppressing_keywords(self, keyword: str) -> None:
        assert compile(f"input(disabled={keyword})") == "<input>"


class TestDynamicAttributes:
    def test_single_variable(self) -> None:
        assert compile("a(href=$url)") == (
            "<a<?php $__value = isset($url) ? $url : false; "
            r"if (!\Jadeite\Runtime\is_null_or_false($__value)) "
            r"""echo ' href='.\Jadeite\Runtime\build_value($__value, '"', true); """
            "unset($__value);?>></a>"
        )

    def test_unescaped_flag(self) -> None:
        assert "build_value($__value, '\"', false)" in compile("a(href!=$url)")

    def test_unchecked_value(self) -> None:
        assert "$__value = $url;" in compile("a(href?=$url)")

    def test_self_repeating_attribute(self) -> None:
        result = compile("input(checked=$on)")
        assert "echo ' checked';" in result
        assert "build_value" not in result

    def test_several_values(self) -> None:
        assert compile("div(class=$a, class='b')") == (
            "<div<?php $__values = [isset($a) ? $a : false, 'b']; "
            r"if (!\Jadeite\Runtime\is_array_null_or_false($__values)) "
            r"""echo ' class='.\Jadeite\Runtime\build_class_value($__values, '"', true); """
            "unset($__values);?>></div>"
        )

    @pytest.mark.parametrize(
        ("name", "builder"),
        [("style", "build_style_value"), ("data-user", "build_data_value"), ("title", "build_value")],
    )
    def test_builder_by_name(self, name: str, builder: str) -> None:
        assert f"\\Jadeite\\Runtime\\{builder}(" in compile(f"div({name}=$value)")

    def test_expression_value(self) -> None:
        assert "$__value = $user->getName();" in compile("a(title=$user->getName())")

    def test_runtime_namespace(self) -> None:
        config = CompilerConfig(runtime_namespace="App\\View")
        assert "\\App\\View\\build_value(" in compile("a(href=$url)", config=config)


class TestAssignments:
    def test_attributes_assignment(self) -> None:
        assert compile("a&attributes(href='/')") == '<a href="/"></a>'

    def test_attributes_need_names(self) -> None:
        with pytest.raises(CompileError, match="only accepts named values"):
            compile("a&attributes('/')")

    def test_classes_assignment(self) -> None:
        assert compile("div&classes('a', 'b')") == '<div class="a b"></div>'

    def test_assignment_after_attributes(self) -> None:
        assert compile("a(href='/')&attributes(title='t')") == '<a href="/" title="t"></a>'
