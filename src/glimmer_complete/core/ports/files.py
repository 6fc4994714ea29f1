from pathlib import Path
from typing import Protocol


class FileSource(Protocol):
    def list_files(self, directory: str | Path) -> list[str]: ...

    def read_text(self, path: str | Path) -> str | None: ...
