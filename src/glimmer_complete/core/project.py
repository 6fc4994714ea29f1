import logging
from dataclasses import dataclass
from pathlib import Path

from glimmer_complete.config import get_settings
from glimmer_complete.core.layout import PathClassifier, layout_for_root
from glimmer_complete.core.ports.files import FileSource
from glimmer_complete.models import ModuleDescriptor, ModuleKind, ProjectLayout
from glimmer_complete.scan.filesystem import FilesystemSource

logger = logging.getLogger(__name__)

_SOURCE_DIRECTORIES = ("app", "addon")


@dataclass(frozen=True)
class ModuleIndex:
    files: tuple[ModuleDescriptor, ...] = ()

    def of_type(self, kind: ModuleKind) -> list[ModuleDescriptor]:
        return [descriptor for descriptor in self.files if descriptor.type == kind]


def build_module_index(layout: ProjectLayout, files: FileSource) -> ModuleIndex:
    classifier = PathClassifier(layout)
    descriptors: list[ModuleDescriptor] = []
    for directory in _SOURCE_DIRECTORIES:
        for relative in files.list_files(Path(layout.root) / directory):
            descriptor = classifier.classify(f"{layout.root}/{directory}/{relative}")
            if descriptor is not None:
                descriptors.append(descriptor)
    logger.info("Indexed %d module(s) under %s", len(descriptors), layout.root)
    return ModuleIndex(files=tuple(descriptors))


class Project:
    def __init__(self, root: str | Path, files: FileSource | None = None) -> None:
        self.root = Path(root).as_posix()
        self.files = files if files is not None else FilesystemSource()
        self.layout = layout_for_root(self.root, self.files)
        self.classifier = PathClassifier(self.layout)
        self._index: ModuleIndex | None = None

    @property
    def index(self) -> ModuleIndex:
        if self._index is None:
            self._index = build_module_index(self.layout, self.files)
        return self._index

    def refresh(self) -> None:
        """Forget the module index and re-read the layout configuration."""
        self.layout = layout_for_root(self.root, self.files)
        self.classifier = PathClassifier(self.layout)
        self._index = None

    def match_path_to_type(self, file_path: str | Path) -> ModuleDescriptor | None:
        return self.classifier.classify(file_path)


class ProjectRoots:
    """Registry of known projects; implements the ``ProjectResolver`` protocol."""

    def __init__(self, files: FileSource | None = None, marker: str | None = None) -> None:
        self.files = files if files is not None else FilesystemSource()
        self.marker = marker or get_settings().project_marker
        self.projects: dict[str, Project] = {}

    def add_project(self, root: str | Path) -> Project:
        key = Path(root).as_posix()
        if key not in self.projects:
            self.projects[key] = Project(key, self.files)
            logger.info("Registered project at %s", key)
        return self.projects[key]

    def project_for_path(self, file_path: str) -> Project | None:
        path = Path(file_path).as_posix()
        roots = [root for root in self.projects if path == root or path.startswith(root.rstrip("/") + "/")]
        if not roots:
            return None
        return self.projects[max(roots, key=len)]

    def discover(self, file_path: str | Path) -> Project | None:
        """Find or register the project owning ``file_path`` by walking up to the marker file."""
        path = Path(file_path).absolute()
        existing = self.project_for_path(path.as_posix())
        if existing is not None:
            return existing
        for directory in path.parents:
            if self.files.read_text(directory / self.marker) is not None:
                return self.add_project(directory)
        logger.debug("No %s found above %s", self.marker, path)
        return None
