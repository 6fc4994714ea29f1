from pathlib import Path
from typing import Protocol


class FileWatcherPort(Protocol):
    """Watches a project directory and reacts to changed source files."""

    directory: Path

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
