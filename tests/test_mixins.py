"""Tests for mixin definitions, calls and compile-time argument binding."""

import logging

import pytest

from jadeite import CompilerConfig, compile
from jadeite.compiler.attributes import AttributeEntry
from jadeite.compiler.mixins import bind_arguments
from jadeite.errors import CompileError

PREAMBLE = "<?php $__args = isset($__args) ? $__args : [];?><?php $__mixins = [];?>"


def call_args(result: str) -> str:
    """The exported argument array of the first mixin call in ``result``."""
    start = result.index("$__mixinCallArgs = ") + len("$__mixinCallArgs = ")
    return result[start : result.index(";", start)]


class TestBindArguments:
    def test_positional_fills_parameters_in_order(self) -> None:
        entries = [AttributeEntry(None, "1"), AttributeEntry(None, "2")]
        assert bind_arguments(["a", "b"], entries) == {"a": "1", "b": "2"}

    def test_positional_skips_named_parameters(self) -> None:
        entries = [AttributeEntry("a", "1"), AttributeEntry(None, "2")]
        assert bind_arguments(["a", "b"], entries) == {"a": "1", "b": "2"}

    def test_missing_arguments_stay_unbound(self) -> None:
        assert bind_arguments(["a", "b"], [AttributeEntry(None, "5")]) == {"a": "5"}

    def test_repeated_names_collect_a_list(self) -> None:
        entries = [AttributeEntry("a", "1"), AttributeEntry("a", "2"), AttributeEntry("a", "3")]
        assert bind_arguments(["a"], entries) == {"a": ["1", "2", "3"]}

    def test_variadic_collects_the_rest(self) -> None:
        entries = [AttributeEntry(None, "'T'"), AttributeEntry(None, "'a'"), AttributeEntry(None, "'b'")]
        assert bind_arguments(["title", "...items"], entries) == {"title": "'T'", "items": ["'a'", "'b'"]}

    def test_empty_variadic(self) -> None:
        assert bind_arguments(["...items"], []) == {"items": []}

    def test_overflow_gets_numeric_keys(self) -> None:
        entries = [AttributeEntry(None, "1"), AttributeEntry(None, "2"), AttributeEntry(None, "3")]
        assert bind_arguments(["a"], entries) == {"a": "1", 0: "2", 1: "3"}


class TestMixinOutput:
    def test_definition_and_call(self) -> None:
        result = compile("mixin greet(name)\n  p Hello #{$name}\n+greet('World')")
        assert result == (
            PREAMBLE
            + "<?php $__mixins['greet'] = function(array $__arguments) use($__args, &$__mixins) { "
            "$__defaults = ['name' => null]; "
            "$__arguments = array_replace($__defaults, $__arguments); "
            "$__args = array_replace($__args, $__arguments); "
            "extract($__args);?>"
            r"<p>Hello <?=htmlentities(isset($name) ? $name : '', \ENT_QUOTES, 'UTF-8')?></p>"
            "<?php };?>"
            "<?php $__mixinCallArgs = ['name' => 'World']; "
            "call_user_func($__mixins['greet'], $__mixinCallArgs); "
            "unset($__mixinCallArgs); unset($__block);?>"
        )

    def test_defaults(self) -> None:
        result = compile("mixin m(a, b='x')\n  p\n+m(1)")
        assert "$__defaults = ['a' => null, 'b' => 'x'];" in result

    def test_uncalled_mixin_is_skipped(self) -> None:
        assert compile("mixin a\n  p") == PREAMBLE

    def test_compile_uncalled_mixins(self) -> None:
        config = CompilerConfig(compile_uncalled_mixins=True)
        assert "$__mixins['a'] = function" in compile("mixin a\n  p", config=config)

    def test_mixins_called_from_mixins_are_emitted(self) -> None:
        result = compile("mixin a\n  +b\nmixin b\n  p\n+a")
        assert "$__mixins['a'] = function" in result
        assert "$__mixins['b'] = function" in result

    def test_definitions_come_before_the_document(self) -> None:
        result = compile("p Before\nmixin a\n  p\n+a")
        assert result.index("$__mixins['a'] = function") < result.index("<p>Before</p>")


class TestMixinLogging:
    def test_registration_and_skips_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="jadeite"):
            compile("mixin used\n  p\nmixin unused\n  p\n+used")
        messages = [record.getMessage() for record in caplog.records]
        assert "Registering mixin used" in messages
        assert "Skipping uncalled mixin unused" in messages


class TestArguments:
    def test_variadic(self) -> None:
        result = compile("mixin list(title, ...items)\n  p\n+list('T', 'a', 'b')")
        assert call_args(result) == "['title' => 'T', 'items' => ['a', 'b']]"
        assert "$__defaults = ['title' => null, 'items' => []];" in result

    def test_overflow(self) -> None:
        assert call_args(compile("mixin m(a)\n  p\n+m(1, 2)")) == "['a' => 1, 0 => 2]"

    def test_named(self) -> None:
        assert call_args(compile("mixin m(a, b)\n  p\n+m(b=2)")) == "['b' => 2]"

    def test_variable_argument_is_guarded(self) -> None:
        result = compile("mixin greet(name)\n  p\n+greet($user)")
        assert call_args(result) == "['name' => isset($user) ? $user : null]"

    def test_classes_become_arguments(self) -> None:
        assert call_args(compile("mixin box\n  div\n+box.wide")) == "['class' => 'wide']"


class TestMixinBlocks:
    def test_call_with_block(self) -> None:
        result = compile("mixin box\n  div\n    block\n+box\n  p Inside")
        assert (
            "<?php $__block = function(array $__arguments = []) use($__args, &$__mixins) { "
            "extract($__args); extract($__arguments);?><p>Inside</p><?php };?>"
        ) in result
        assert "$__mixinCallArgs['__block'] = isset($__block) ? $__block : null;" in result

    def test_block_placeholder(self) -> None:
        result = compile("mixin box\n  div\n    block\n+box\n  p")
        assert (
            r"<div><?=isset($__block) && $__block instanceof \Closure"
            " ? $__block(array_replace($__args, $__arguments)) : ''?></div>"
        ) in result


class TestMixinErrors:
    def test_undefined_mixin(self) -> None:
        with pytest.raises(CompileError, match="Mixin nope is not defined"):
            compile("+nope")

    def test_duplicate_mixin(self) -> None:
        with pytest.raises(CompileError, match="Duplicate mixin name a"):
            compile("mixin a\n  p\nmixin a\n  p")

    def test_replace_mixins(self) -> None:
        config = CompilerConfig(replace_mixins=True)
        result = compile("mixin a\n  p One\nmixin a\n  p Two\n+a", config=config)
        assert "Two" in result
        assert "One" not in result
