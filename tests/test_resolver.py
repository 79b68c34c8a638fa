"""Tests for PathResolver search order."""

from pathlib import Path

from jadeite import PathResolver


def write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestResolve:
    def test_search_path_with_extension(self, tmp_path: Path) -> None:
        target = write(tmp_path / "views" / "header.jade")
        resolver = PathResolver([tmp_path / "views"])
        assert resolver.resolve("header") == target

    def test_current_directory_comes_first(self, tmp_path: Path) -> None:
        local = write(tmp_path / "pages" / "nav.jade")
        write(tmp_path / "views" / "nav.jade")
        resolver = PathResolver([tmp_path / "views"])
        assert resolver.resolve("nav", current_file=tmp_path / "pages" / "index.jade") == local

    def test_search_paths_in_order(self, tmp_path: Path) -> None:
        write(tmp_path / "a" / "x.jade")
        second = write(tmp_path / "b" / "y.jade")
        resolver = PathResolver([tmp_path / "a", tmp_path / "b"])
        assert resolver.resolve("y") == second

    def test_path_as_given(self, tmp_path: Path) -> None:
        target = write(tmp_path / "page.jade")
        assert PathResolver().resolve(str(tmp_path / "page")) == target

    def test_existing_extension_is_not_repeated(self, tmp_path: Path) -> None:
        target = write(tmp_path / "page.jade")
        assert PathResolver([tmp_path]).resolve("page.jade") == target

    def test_explicit_extension(self, tmp_path: Path) -> None:
        write(tmp_path / "style.jade")
        target = write(tmp_path / "style.css")
        assert PathResolver([tmp_path]).resolve("style", extension=".css") == target

    def test_every_configured_extension_is_tried(self, tmp_path: Path) -> None:
        target = write(tmp_path / "page.jd")
        assert PathResolver([tmp_path], extensions=(".jade", ".jd")).resolve("page") == target

    def test_leading_slash_is_relative_to_search_path(self, tmp_path: Path) -> None:
        target = write(tmp_path / "views" / "footer.jade")
        assert PathResolver([tmp_path / "views"]).resolve("/footer") == target

    def test_directories_are_not_files(self, tmp_path: Path) -> None:
        (tmp_path / "dir.jade").mkdir()
        assert PathResolver([tmp_path]).resolve("dir") is None

    def test_missing(self, tmp_path: Path) -> None:
        assert PathResolver([tmp_path]).resolve("nothing") is None

    def test_search_paths_property(self, tmp_path: Path) -> None:
        assert PathResolver([str(tmp_path)]).search_paths == (tmp_path,)
