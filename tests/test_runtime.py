"""Tests for the PHP runtime helpers and stand-alone output."""

import pytest

from jadeite import CompilerConfig, compile, render_runtime
from jadeite.compiler.runtime import RUNTIME_FUNCTIONS


class TestRenderRuntime:
    def test_namespace_block(self) -> None:
        source = render_runtime("Jadeite\\Runtime")
        assert source.startswith("<?php\nnamespace Jadeite\\Runtime {")
        assert source.rstrip().endswith("?>")

    def test_leading_backslash_is_dropped(self) -> None:
        assert "namespace App\\View {" in render_runtime("\\App\\View\\")

    @pytest.mark.parametrize("name", RUNTIME_FUNCTIONS)
    def test_declares_function(self, name: str) -> None:
        source = render_runtime("Jadeite\\Runtime")
        assert f"function {name}(" in source
        assert f"function_exists(__NAMESPACE__.'\\\\{name}')" in source

    def test_no_placeholders_left(self) -> None:
        assert "@namespace" not in render_runtime("X")


class TestStandAlone:
    def test_runtime_is_prepended(self) -> None:
        result = compile("p", config=CompilerConfig(stand_alone=True))
        assert result.startswith("<?php\nnamespace Jadeite\\Runtime {")
        assert result.endswith("<?php namespace {?><p></p><?php }?>")

    def test_runtime_follows_namespace_option(self) -> None:
        config = CompilerConfig(stand_alone=True, runtime_namespace="App\\View")
        result = compile("a(href=$url)", config=config)
        assert "namespace App\\View {" in result
        assert "\\App\\View\\build_value(" in result

    def test_not_stand_alone_by_default(self) -> None:
        assert "function flatten" not in compile("p")
