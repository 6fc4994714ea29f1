"""Unit tests for filesystem-backed file sources."""

from pathlib import Path

import pytest

from glimmer_complete.scan import CachedFileSource, FilesystemSource


class _CountingSource:
    def __init__(self) -> None:
        self.listed = 0
        self.read = 0

    def list_files(self, directory: str | Path) -> list[str]:
        self.listed += 1
        return ["a.js"]

    def read_text(self, path: str | Path) -> str | None:
        self.read += 1
        return "text"


class TestFilesystemSource:
    def test_lists_relative_sorted_paths(self, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "z.js").write_text("")
        (tmp_path / "a.hbs").write_text("")
        assert FilesystemSource().list_files(tmp_path) == ["a.hbs", "b/z.js"]

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert FilesystemSource().list_files(tmp_path / "nope") == []

    def test_read_text(self, tmp_path: Path) -> None:
        (tmp_path / "x.hbs").write_text("{{foo}}")
        source = FilesystemSource()
        assert source.read_text(tmp_path / "x.hbs") == "{{foo}}"
        assert source.read_text(tmp_path / "missing.hbs") is None

    def test_undecodable_file_reads_as_none(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "fr-fr.json").write_bytes("caf\u00e9".encode("latin-1"))
        with caplog.at_level("WARNING"):
            assert FilesystemSource().read_text(tmp_path / "fr-fr.json") is None
        assert "fr-fr.json" in caplog.text

    def test_directory_reads_as_none(self, tmp_path: Path) -> None:
        assert FilesystemSource().read_text(tmp_path) is None


class TestCachedFileSource:
    def test_memoises_until_invalidated(self) -> None:
        inner = _CountingSource()
        cache = CachedFileSource(inner)
        cache.list_files("/p/app")
        cache.list_files("/p/app")
        cache.read_text("/p/app/a.js")
        cache.read_text("/p/app/a.js")
        assert (inner.listed, inner.read) == (1, 1)

        cache.invalidate(["/p/app/a.js"])
        cache.list_files("/p/app")
        cache.read_text("/p/app/a.js")
        assert (inner.listed, inner.read) == (2, 2)

    def test_invalidate_keeps_unrelated_listings(self) -> None:
        inner = _CountingSource()
        cache = CachedFileSource(inner)
        cache.list_files("/p/app/routes")
        cache.list_files("/p/translations")
        cache.invalidate([Path("/p/app/routes/new.js")])
        cache.list_files("/p/translations")
        assert inner.listed == 2

    def test_invalidate_everything(self) -> None:
        inner = _CountingSource()
        cache = CachedFileSource(inner)
        cache.list_files("/p")
        cache.invalidate()
        cache.list_files("/p")
        assert inner.listed == 2

    def test_returns_copies(self) -> None:
        cache = CachedFileSource(_CountingSource())
        cache.list_files("/p").append("mutated")
        assert cache.list_files("/p") == ["a.js"]
