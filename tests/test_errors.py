"""Tests for error types and the locations they report."""

import pytest

from jadeite import CompileError, JadeiteError, LexError, ParseError, compile, parse


class TestErrorHierarchy:
    @pytest.mark.parametrize("error_type", [LexError, ParseError, CompileError])
    def test_stages_share_a_base(self, error_type: type[JadeiteError]) -> None:
        assert issubclass(error_type, JadeiteError)
        assert issubclass(error_type, Exception)

    def test_catch_any_stage(self) -> None:
        with pytest.raises(JadeiteError):
            compile("+undefined")


class TestErrorFormatting:
    def test_message_only(self) -> None:
        assert str(JadeiteError("Boom")) == "Boom"

    def test_full_location(self) -> None:
        error = JadeiteError("Boom", line=3, offset=4, source_file="a.jade")
        assert str(error) == "a.jade:3:4 Boom"
        assert error.message == "Boom"

    def test_line_without_file(self) -> None:
        assert str(JadeiteError("Boom", line=3)) == "3 Boom"

    def test_compile_error_names_node_kind(self) -> None:
        error = CompileError("Bad", line=1, offset=0, source_file="a.jade", node_kind="mixin_call")
        assert str(error) == "a.jade:1:0 Bad (in mixin_call)"


class TestWithSourceFile:
    def test_fills_missing_file(self) -> None:
        error = LexError("Bad", line=2, offset=1)
        assert error.with_source_file("page.jade") is error
        assert error.source_file == "page.jade"
        assert str(error) == "page.jade:2:1 Bad"

    def test_keeps_existing_file(self) -> None:
        error = ParseError("Bad", source_file="inner.jade")
        error.with_source_file("outer.jade")
        assert error.source_file == "inner.jade"

    def test_none_is_ignored(self) -> None:
        error = JadeiteError("Bad")
        error.with_source_file(None)
        assert error.source_file is None


class TestPipelineErrors:
    def test_lex_error_carries_file_and_line(self) -> None:
        with pytest.raises(LexError) as info:
            compile("p\n  (", "page.jade")
        assert info.value.source_file == "page.jade"
        assert info.value.line == 2

    def test_parse_error_carries_file(self) -> None:
        with pytest.raises(ParseError) as info:
            parse("  p", source_file="page.jade")
        assert str(info.value).startswith("page.jade:")

    def test_compile_error_location(self) -> None:
        with pytest.raises(CompileError) as info:
            compile("+nope", "page.jade")
        message = str(info.value)
        assert "page.jade:1:0" in message
        assert message.endswith("(in mixin_call)")

    def test_fragment_errors_name_the_template(self) -> None:
        with pytest.raises(JadeiteError) as info:
            compile("p #[a(='/') x]", "page.jade")
        assert info.value.source_file == "page.jade"
