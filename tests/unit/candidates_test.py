"""Unit tests for candidate gathering."""

from pathlib import Path

from lsprotocol.types import CompletionItemKind

from glimmer_complete.core.candidates import (
    BLOCK_KEYWORDS,
    MUSTACHE_KEYWORDS,
    SUB_EXPRESSION_KEYWORDS,
    gather_candidates,
    list_components,
    list_helpers,
    list_routes,
    unique_by_label,
)
from glimmer_complete.core.context import CompletionContext
from glimmer_complete.core.project import ModuleIndex
from glimmer_complete.models import CompletionCandidate, ModuleDescriptor, ModuleKind


class _FakeFiles:
    def __init__(self, listings: dict[str, list[str]]) -> None:
        self.listings = listings

    def list_files(self, directory: str | Path) -> list[str]:
        return list(self.listings.get(Path(directory).as_posix(), []))

    def read_text(self, path: str | Path) -> str | None:
        return None


class _FakeProject:
    def __init__(self, files: _FakeFiles, index: ModuleIndex | None = None) -> None:
        self.root = "/app-root"
        self.files = files
        self.index = index or ModuleIndex()


def _project() -> _FakeProject:
    files = _FakeFiles(
        {
            "/app-root/app/components": ["foo-bar.js", "foo-bar.hbs", "nested/item.ts", "styles.css"],
            "/app-root/app/templates/components": ["foo-bar.hbs", "legacy.hbs"],
            "/app-root/app/helpers": ["format-date.js", "README.md"],
        }
    )
    index = ModuleIndex(
        files=(
            ModuleDescriptor(name="posts", type=ModuleKind.ROUTE),
            ModuleDescriptor(name="posts/show", type=ModuleKind.ROUTE),
            ModuleDescriptor(name="foo-bar", type=ModuleKind.COMPONENT),
        )
    )
    return _FakeProject(files, index)


def _labels(items: list[CompletionCandidate]) -> list[str]:
    return [item.label for item in items]


class TestUniqueByLabel:
    def test_keeps_first_occurrence(self) -> None:
        first = CompletionCandidate(kind=CompletionItemKind.Class, label="a", detail="component")
        second = CompletionCandidate(kind=CompletionItemKind.Function, label="a", detail="helper")
        assert unique_by_label([first, second]) == [first]


class TestEnumerations:
    def test_components_from_both_directories_deduplicated(self) -> None:
        project = _project()
        items = list_components(project.root, project.files)
        assert _labels(items) == ["foo-bar", "nested/item", "legacy"]
        assert all(item.kind == CompletionItemKind.Class for item in items)
        assert all(item.detail == "component" for item in items)

    def test_helpers_skip_other_files(self) -> None:
        project = _project()
        items = list_helpers(project.root, project.files)
        assert _labels(items) == ["format-date"]
        assert items[0].kind == CompletionItemKind.Function

    def test_routes_come_from_index(self) -> None:
        items = list_routes(_project().index)
        assert _labels(items) == ["posts", "posts/show"]
        assert all(item.kind == CompletionItemKind.File for item in items)

    def test_missing_directories_yield_nothing(self) -> None:
        files = _FakeFiles({})
        assert list_components("/nowhere", files) == []
        assert list_helpers("/nowhere", files) == []


class TestGatherCandidates:
    def test_none_context_is_empty(self) -> None:
        assert gather_candidates(CompletionContext.NONE, _project()) == []

    def test_mustache_union(self) -> None:
        labels = _labels(gather_candidates(CompletionContext.MUSTACHE_INVOCATION_TARGET, _project()))
        assert labels[:4] == ["foo-bar", "nested/item", "legacy", "format-date"]
        assert labels[4:] == [item.label for item in MUSTACHE_KEYWORDS]

    def test_block_union(self) -> None:
        labels = _labels(gather_candidates(CompletionContext.BLOCK_INVOCATION_TARGET, _project()))
        assert "format-date" not in labels
        assert labels[-len(BLOCK_KEYWORDS) :] == [item.label for item in BLOCK_KEYWORDS]

    def test_sub_expression_union(self) -> None:
        labels = _labels(gather_candidates(CompletionContext.SUB_EXPRESSION_TARGET, _project()))
        assert labels == ["format-date", *(item.label for item in SUB_EXPRESSION_KEYWORDS)]

    def test_link_target_lists_routes(self) -> None:
        labels = _labels(gather_candidates(CompletionContext.LINK_TARGET, _project()))
        assert labels == ["posts", "posts/show"]

    def test_union_is_deduplicated(self) -> None:
        files = _FakeFiles({"/app-root/app/components": ["if.js"]})
        labels = _labels(gather_candidates(CompletionContext.BLOCK_INVOCATION_TARGET, _FakeProject(files)))
        assert labels.count("if") == 1
