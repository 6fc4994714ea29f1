"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from glimmer_complete.core.template_parser import GlimmerParser

_REPO_ROOT = Path(__file__).parent.parent

ProjectTree = dict[str, Any]


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Project builders
# ---------------------------------------------------------------------------


def write_tree(root: Path, tree: ProjectTree) -> None:
    """Write nested ``{name: content | subtree}`` dicts below ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in tree.items():
        target = root / name
        if isinstance(content, dict):
            write_tree(target, content)
        else:
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[ProjectTree], Path]:
    """Return a factory that lays out an Ember project and returns its root."""

    def _make(tree: ProjectTree) -> Path:
        root = tmp_path / "project"
        write_tree(root, {"package.json": '{"name": "test-app"}', **tree})
        return root

    return _make


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parser() -> GlimmerParser:
    return GlimmerParser()
