from collections.abc import Callable
from pathlib import Path

import pytest

from glimmer_complete.config import Settings
from glimmer_complete.core.completion import CompletionEngine
from glimmer_complete.core.project import ProjectRoots
from glimmer_complete.documents import InMemoryDocumentStore
from glimmer_complete.models import Position

CompleteAt = Callable[..., list[dict]]


@pytest.fixture
def complete_at() -> CompleteAt:
    """Open ``relative`` from ``root`` and return JSON-shaped completions at ``line``/``character``."""

    def _complete(root: Path, relative: str, line: int, character: int, **engine_options: object) -> list[dict]:
        documents = InMemoryDocumentStore()
        projects = ProjectRoots()
        projects.add_project(root)
        path = root / relative
        uri = path.as_uri()
        documents.open(uri, path.read_text(encoding="utf-8"))
        engine = CompletionEngine(documents, projects, settings=Settings(), **engine_options)  # type: ignore[arg-type]
        return [
            candidate.model_dump(mode="json")
            for candidate in engine.provide_completions(uri, Position(line=line, column=character))
        ]

    return _complete
