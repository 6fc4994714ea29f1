import logging
import posixpath
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from lsprotocol.types import CompletionItemKind

from glimmer_complete.core.context import CompletionContext
from glimmer_complete.core.ports.files import FileSource
from glimmer_complete.models import CompletionCandidate, ModuleDescriptor, ModuleKind

logger = logging.getLogger(__name__)


class SymbolIndex(Protocol):
    files: tuple[ModuleDescriptor, ...]


class ProjectSnapshot(Protocol):
    @property
    def root(self) -> str: ...

    @property
    def files(self) -> FileSource: ...

    @property
    def index(self) -> SymbolIndex: ...


def _builtins(*labels: str) -> tuple[CompletionCandidate, ...]:
    return tuple(CompletionCandidate(kind=CompletionItemKind.Function, label=label, detail="built-in") for label in labels)


MUSTACHE_KEYWORDS = _builtins(
    "action",
    "array",
    "component",
    "concat",
    "debugger",
    "each-in",
    "fn",
    "get",
    "hash",
    "if",
    "input",
    "link-to",
    "loc",
    "log",
    "mount",
    "mut",
    "outlet",
    "partial",
    "query-params",
    "textarea",
    "unbound",
    "unless",
    "with",
    "yield",
)

BLOCK_KEYWORDS = _builtins(
    "component",
    "each",
    "each-in",
    "if",
    "in-element",
    "let",
    "link-to",
    "unless",
    "with",
)

SUB_EXPRESSION_KEYWORDS = _builtins(
    "action",
    "array",
    "component",
    "concat",
    "fn",
    "get",
    "hash",
    "if",
    "loc",
    "log",
    "mut",
    "query-params",
    "unless",
)

_COMPONENT_EXTENSIONS = (".js", ".ts", ".hbs")
_HELPER_EXTENSIONS = (".js", ".ts")


def unique_by_label(items: Iterable[CompletionCandidate]) -> list[CompletionCandidate]:
    seen: set[str] = set()
    unique: list[CompletionCandidate] = []
    for item in items:
        if item.label in seen:
            continue
        seen.add(item.label)
        unique.append(item)
    return unique


def _label_for(relative_path: str) -> str:
    return posixpath.splitext(relative_path)[0]


def list_components(root: str, files: FileSource) -> list[CompletionCandidate]:
    paths = [
        *files.list_files(Path(root) / "app" / "components"),
        *files.list_files(Path(root) / "app" / "templates" / "components"),
    ]
    items = (
        CompletionCandidate(kind=CompletionItemKind.Class, label=_label_for(path), detail="component")
        for path in paths
        if path.endswith(_COMPONENT_EXTENSIONS)
    )
    return unique_by_label(items)


def list_helpers(root: str, files: FileSource) -> list[CompletionCandidate]:
    paths = files.list_files(Path(root) / "app" / "helpers")
    items = (
        CompletionCandidate(kind=CompletionItemKind.Function, label=_label_for(path), detail="helper")
        for path in paths
        if path.endswith(_HELPER_EXTENSIONS)
    )
    return unique_by_label(items)


def list_routes(index: SymbolIndex) -> list[CompletionCandidate]:
    items = (
        CompletionCandidate(kind=CompletionItemKind.File, label=descriptor.name, detail="route")
        for descriptor in index.files
        if descriptor.type == ModuleKind.ROUTE
    )
    return unique_by_label(items)


def gather_candidates(context: CompletionContext, project: ProjectSnapshot) -> list[CompletionCandidate]:
    """Collect the unfiltered candidates for ``context`` from ``project``."""
    if context is CompletionContext.NONE:
        return []

    candidates: list[CompletionCandidate] = []
    if context is CompletionContext.MUSTACHE_INVOCATION_TARGET:
        candidates.extend(list_components(project.root, project.files))
        candidates.extend(list_helpers(project.root, project.files))
        candidates.extend(MUSTACHE_KEYWORDS)
    elif context is CompletionContext.BLOCK_INVOCATION_TARGET:
        candidates.extend(list_components(project.root, project.files))
        candidates.extend(BLOCK_KEYWORDS)
    elif context is CompletionContext.SUB_EXPRESSION_TARGET:
        candidates.extend(list_helpers(project.root, project.files))
        candidates.extend(SUB_EXPRESSION_KEYWORDS)
    elif context is CompletionContext.LINK_TARGET:
        candidates.extend(list_routes(project.index))

    logger.debug("Gathered %d candidate(s) for %s", len(candidates), context.value)
    return unique_by_label(candidates)
