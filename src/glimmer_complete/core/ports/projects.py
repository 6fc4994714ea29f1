from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from glimmer_complete.core.project import Project


class ProjectResolver(Protocol):
    def project_for_path(self, file_path: str) -> "Project | None": ...
