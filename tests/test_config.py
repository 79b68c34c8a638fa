"""Tests for ContextVar-based compiler configuration.

Validates defaults, validation, dict conversion, thread isolation and
context manager behavior.
"""

from threading import Thread

import pytest

from jadeite import (
    Compiler,
    CompilerConfig,
    Mode,
    compile,
    compiler_config_context,
    get_compiler_config,
    reset_compiler_config,
    set_compiler_config,
)
from jadeite.filters import DEFAULT_FILTERS, filter_plain


class TestCompilerConfigDataclass:
    """Test CompilerConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = CompilerConfig()
        assert config.pretty is False
        assert config.indent_style == " "
        assert config.indent_width == 2
        assert config.mode is Mode.HTML
        assert config.quote_style == '"'
        assert config.default_tag == "div"
        assert config.allow_imports is True
        assert config.max_import_depth == 64
        assert "input" in config.self_closing_tags
        assert config.self_repeating_attributes == frozenset({"selected", "checked", "disabled"})

    def test_immutability(self) -> None:
        config = CompilerConfig()
        with pytest.raises(AttributeError):
            config.pretty = True  # type: ignore[misc]

    @pytest.mark.parametrize(
        "options",
        [
            {"indent_style": "x"},
            {"lexer_indent_style": "-"},
            {"quote_style": "`"},
            {"indent_width": 0},
        ],
    )
    def test_invalid_values(self, options: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            CompilerConfig(**options)  # type: ignore[arg-type]

    def test_runtime_prefix(self) -> None:
        assert CompilerConfig().runtime_prefix == "\\Jadeite\\Runtime\\"
        assert CompilerConfig(runtime_namespace="App\\View\\").runtime_prefix == "\\App\\View\\"
        assert CompilerConfig(runtime_namespace="").runtime_prefix == "\\"

    def test_filter_lookup(self) -> None:
        config = CompilerConfig()
        assert config.filter_for("plain") is filter_plain
        assert config.filter_for("nope") is None


class TestFromDict:
    def test_field_names_and_aliases(self) -> None:
        config = CompilerConfig.from_dict({"pretty": True, "indentWidth": 4, "unknown_key": 1})
        assert config.pretty is True
        assert config.indent_width == 4

    def test_mode_from_string(self) -> None:
        assert CompilerConfig.from_dict({"mode": "XHTML"}).mode is Mode.XHTML

    def test_collections_are_frozen(self) -> None:
        config = CompilerConfig.from_dict({"selfClosingTags": ["a", "b"], "paths": "views"})
        assert config.self_closing_tags == frozenset({"a", "b"})
        assert config.search_paths == ("views",)

    def test_file_extension_alias(self) -> None:
        assert CompilerConfig.from_dict({"fileExtension": [".pug"]}).file_extensions == (".pug",)

    def test_custom_filters_extend_defaults(self) -> None:
        def shout(node, indent, newline, compiler):  # type: ignore[no-untyped-def]
            return node.text().upper()

        config = CompilerConfig.from_dict({"filters": {"shout": shout}})
        assert config.filter_for("shout") is shout
        assert set(DEFAULT_FILTERS) <= set(config.filters)


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_compiler_config()

    def test_default(self) -> None:
        assert get_compiler_config() == CompilerConfig()

    def test_set_and_reset(self) -> None:
        custom = CompilerConfig(pretty=True)
        set_compiler_config(custom)
        assert get_compiler_config() is custom
        reset_compiler_config()
        assert get_compiler_config().pretty is False

    def test_module_compile_reads_context(self) -> None:
        set_compiler_config(CompilerConfig(pretty=True))
        assert compile("ul\n  li") == "<ul>\n  <li></li>\n</ul>"

    def test_compiler_keeps_its_config(self) -> None:
        compiler = Compiler()
        set_compiler_config(CompilerConfig(pretty=True))
        assert compiler.compile("ul\n  li") == "<ul><li></li></ul>"


class TestContextManager:
    def test_restores_previous(self) -> None:
        with compiler_config_context(CompilerConfig(pretty=True)):
            assert get_compiler_config().pretty is True
        assert get_compiler_config().pretty is False

    def test_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with compiler_config_context(CompilerConfig(pretty=True)):
                raise RuntimeError("boom")
        assert get_compiler_config().pretty is False

    def test_nesting(self) -> None:
        with compiler_config_context(CompilerConfig(indent_width=4)):
            with compiler_config_context(CompilerConfig(indent_width=8)):
                assert get_compiler_config().indent_width == 8
            assert get_compiler_config().indent_width == 4


class TestThreadIsolation:
    def test_threads_do_not_see_each_others_config(self) -> None:
        results: dict[str, bool] = {}

        def worker(name: str, pretty: bool) -> None:
            set_compiler_config(CompilerConfig(pretty=pretty))
            results[name] = get_compiler_config().pretty

        threads = [Thread(target=worker, args=(f"t{i}", i % 2 == 0)) for i in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {f"t{i}": i % 2 == 0 for i in range(6)}
        assert get_compiler_config().pretty is False
