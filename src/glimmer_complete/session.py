"""Wiring of documents, projects and the completion engine for one client."""

import logging
from pathlib import Path

from glimmer_complete.config import Settings, get_settings
from glimmer_complete.core.completion import CompletionEngine
from glimmer_complete.core.ports.files import FileSource
from glimmer_complete.core.project import Project, ProjectRoots
from glimmer_complete.documents import InMemoryDocumentStore
from glimmer_complete.models import CompletionCandidate, ModuleDescriptor, ModuleKind, Position
from glimmer_complete.scan import CachedFileSource

logger = logging.getLogger(__name__)


class ProjectNotFoundError(LookupError):
    def __init__(self, file_path: str | Path) -> None:
        super().__init__(f"No project found for {file_path}")
        self.file_path = file_path


class CompletionSession:
    def __init__(self, files: FileSource | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.files = files if files is not None else CachedFileSource()
        self.documents = InMemoryDocumentStore()
        self.projects = ProjectRoots(self.files, self.settings.project_marker)
        self.engine = CompletionEngine(self.documents, self.projects, settings=self.settings)

    def project_for(self, file_path: str | Path, root: str | Path | None = None) -> Project:
        """Return the project owning ``file_path``, registering ``root`` or discovering one."""
        if root is not None:
            return self.projects.add_project(Path(root).absolute())
        project = self.projects.discover(file_path)
        if project is None:
            raise ProjectNotFoundError(file_path)
        return project

    def refresh(self) -> None:
        """Drop everything read from disk so the next request sees current files."""
        if isinstance(self.files, CachedFileSource):
            self.files.invalidate()
        for project in self.projects.projects.values():
            project.refresh()

    def complete(
        self,
        file_path: str | Path,
        position: Position,
        text: str | None = None,
        root: str | Path | None = None,
    ) -> list[CompletionCandidate]:
        """Complete at ``position`` in ``file_path``, using ``text`` instead of the file on disk when given."""
        path = Path(file_path).absolute()
        self.project_for(path, root)
        if text is None:
            text = self.files.read_text(path)
            if text is None:
                raise FileNotFoundError(f"Cannot read {path}")
        uri = path.as_uri()
        self.documents.open(uri, text)
        try:
            return self.engine.provide_completions(uri, position)
        finally:
            self.documents.close(uri)

    def classify(self, file_path: str | Path, root: str | Path | None = None) -> ModuleDescriptor | None:
        path = Path(file_path).absolute()
        return self.project_for(path, root).match_path_to_type(path.as_posix())

    def modules(self, root: str | Path, kind: ModuleKind | None = None) -> list[ModuleDescriptor]:
        project = self.projects.add_project(Path(root).absolute())
        if kind is None:
            return list(project.index.files)
        return project.index.of_type(kind)
