"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from glimmer_complete.core.project import Project
from glimmer_complete.models import ModuleKind
from glimmer_complete.scan import CachedFileSource
from glimmer_complete.watcher.watchfiles_adapter import (
    WatchfilesWatcher,
    _is_watched_file,
    project_refresher,
)


class TestIsWatchedFile:
    @pytest.mark.parametrize("name", ["a.hbs", "b.js", "c.ts", "en-us.json", "en-us.yaml", "de.yml", "X.HBS"])
    def test_watched(self, name: str) -> None:
        assert _is_watched_file(Path(name)) is True

    @pytest.mark.parametrize("name", ["readme.txt", "Makefile", "photo.png", "styles.css"])
    def test_ignored(self, name: str) -> None:
        assert _is_watched_file(Path(name)) is False


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from glimmer_complete.core.ports.watcher import FileWatcherPort

        watcher: FileWatcherPort = WatchfilesWatcher("/tmp", AsyncMock())
        assert watcher.directory == Path("/tmp")

    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        watcher = WatchfilesWatcher("/tmp", AsyncMock())

        with patch("glimmer_complete.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        await WatchfilesWatcher("/tmp", AsyncMock()).stop()

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self) -> None:
        watcher = WatchfilesWatcher("/tmp", AsyncMock())

        with patch("glimmer_complete.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            task = watcher._task
            await watcher.start()
            assert watcher._task is task
            await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_receives_watched_files(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)
        changes = {(1, "/tmp/app/foo.hbs"), (2, "/tmp/notes.txt"), (1, "/tmp/translations/en-us.json")}

        with patch("glimmer_complete.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        assert callback.call_args[0][0] == {Path("/tmp/app/foo.hbs"), Path("/tmp/translations/en-us.json")}

    @pytest.mark.asyncio
    async def test_callback_not_called_for_ignored_only(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("glimmer_complete.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(1, "/tmp/readme.txt")})
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_errors_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("glimmer_complete.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(1, "/tmp/a.hbs")})
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        assert "Error in watcher callback" in caplog.text


class TestProjectRefresher:
    @pytest.mark.asyncio
    async def test_invalidates_and_refreshes(self, make_project: Callable[[dict], Path]) -> None:
        root = make_project({"app": {"routes": {"posts.js": ""}}})
        cache = CachedFileSource()
        project = Project(root, cache)
        assert len(project.index.of_type(ModuleKind.ROUTE)) == 1

        new_route = root / "app" / "routes" / "about.js"
        new_route.write_text("")
        await project_refresher(project, cache)({new_route})
        assert len(project.index.of_type(ModuleKind.ROUTE)) == 2

    @pytest.mark.asyncio
    async def test_calls_collaborators(self) -> None:
        project = MagicMock()
        cache = MagicMock()
        await project_refresher(project, cache)({Path("/p/a.hbs")})
        cache.invalidate.assert_called_once_with({Path("/p/a.hbs")})
        project.refresh.assert_called_once_with()


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # pragma: no cover


async def _single_change_iter(changes: set[tuple[int, str]]) -> AsyncIterator[set[tuple[int, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
