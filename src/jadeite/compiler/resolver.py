"""Template path resolution.

Search order for ``include foo`` compiled from ``views/page.jade``:

1. ``views/foo.jade`` (next to the including file)
2. ``<search path>/foo.jade`` for each configured search path
3. ``foo.jade`` as given (absolute, or relative to the working directory)

Each location is tried with every configured extension before moving on.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jadeite.utils.logger import get_logger

logger = get_logger(__name__)


class PathResolver:
    """Resolve import paths against the current file and search paths.

    Thread Safety:
        Immutable after construction; safe to share.

    """

    __slots__ = ("_search_paths", "_extensions")

    def __init__(self, search_paths: Iterable[str | Path] = (), extensions: Iterable[str] = (".jade",)) -> None:
        self._search_paths = tuple(Path(path) for path in search_paths)
        self._extensions = tuple(extensions)

    @property
    def search_paths(self) -> tuple[Path, ...]:
        return self._search_paths

    def resolve(
        self,
        path: str,
        extension: str | None = None,
        current_file: str | Path | None = None,
    ) -> Path | None:
        """Find the file ``path`` refers to.

        Args:
            path: Path as written in the template
            extension: Extension to append when ``path`` lacks it; every
                configured extension is tried when None
            current_file: File being compiled, whose directory is searched first

        Returns:
            The resolved path, or None if no candidate exists.
        """
        extensions = (extension,) if extension else self._extensions
        for directory in self._directories(current_file):
            for ext in extensions:
                name = path if path.endswith(ext) else path + ext
                candidate = directory / name.lstrip("/\\") if directory else Path(name)
                if candidate.is_file():
                    logger.debug("Resolved %s to %s", path, candidate)
                    return candidate
        return None

    def _directories(self, current_file: str | Path | None) -> list[Path | None]:
        directories: list[Path | None] = []
        if current_file is not None:
            directories.append(Path(current_file).parent)
        directories.extend(self._search_paths)
        # None stands for the path as given
        directories.append(None)
        return directories
