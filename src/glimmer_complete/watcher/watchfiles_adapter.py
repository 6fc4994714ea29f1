from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import TYPE_CHECKING, Any

from watchfiles import awatch

from glimmer_complete.core.languages import WATCHED_EXTENSIONS

if TYPE_CHECKING:
    from glimmer_complete.core.project import Project
    from glimmer_complete.scan.filesystem import CachedFileSource

logger = logging.getLogger(__name__)


def _is_watched_file(path: Path) -> bool:
    return path.suffix.lower() in WATCHED_EXTENSIONS


def project_refresher(
    project: Project,
    cache: CachedFileSource,
) -> Callable[[set[Path]], Coroutine[Any, Any, None]]:
    """Build a change callback that drops stale cache entries and re-reads ``project``."""

    async def refresh(paths: set[Path]) -> None:
        cache.invalidate(paths)
        project.refresh()
        logger.info("Refreshed %s after %d change(s)", project.root, len(paths))

    return refresh


class WatchfilesWatcher:
    """Watch a project directory for template, script and translation changes.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path]], Coroutine[Any, Any, None]],
    ) -> None:
        self.directory = Path(directory)
        self._on_change = on_change
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watching %s", self.directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped watching %s", self.directory)

    async def _watch(self) -> None:
        async for changes in awatch(self.directory):
            paths = {Path(p) for _, p in changes if _is_watched_file(Path(p))}
            if not paths:
                continue
            logger.debug("Detected changes in %d file(s)", len(paths))
            try:
                await self._on_change(paths)
            except Exception:
                logger.exception("Error in watcher callback")
