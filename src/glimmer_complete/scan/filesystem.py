import logging
from collections.abc import Iterable
from pathlib import Path

from glimmer_complete.core.ports.files import FileSource

logger = logging.getLogger(__name__)


class FilesystemSource:
    """Read project files straight from disk."""

    def list_files(self, directory: str | Path) -> list[str]:
        base = Path(directory)
        if not base.is_dir():
            return []
        return sorted(path.relative_to(base).as_posix() for path in base.rglob("*") if path.is_file())

    def read_text(self, path: str | Path) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return None


class CachedFileSource:
    """Memoise another ``FileSource`` until told which paths changed.

    Implements the ``FileSource`` protocol.
    """

    def __init__(self, source: FileSource | None = None) -> None:
        self._source = source if source is not None else FilesystemSource()
        self._listings: dict[Path, list[str]] = {}
        self._texts: dict[Path, str | None] = {}

    def list_files(self, directory: str | Path) -> list[str]:
        key = Path(directory)
        if key not in self._listings:
            self._listings[key] = self._source.list_files(key)
        return list(self._listings[key])

    def read_text(self, path: str | Path) -> str | None:
        key = Path(path)
        if key not in self._texts:
            self._texts[key] = self._source.read_text(key)
        return self._texts[key]

    def invalidate(self, paths: Iterable[str | Path] | None = None) -> None:
        if paths is None:
            self._listings.clear()
            self._texts.clear()
            return
        for raw in paths:
            path = Path(raw)
            self._texts.pop(path, None)
            stale = [directory for directory in self._listings if directory == path or directory in path.parents]
            for directory in stale:
                del self._listings[directory]
            logger.debug("Invalidated %s (%d cached listing(s))", path, len(stale))
