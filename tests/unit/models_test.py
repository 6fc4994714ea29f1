"""Unit tests for Pydantic models."""

import pytest
from lsprotocol.types import CompletionItemKind
from pydantic import ValidationError

from glimmer_complete.models import (
    CompletionCandidate,
    ModuleDescriptor,
    ModuleKind,
    Position,
    ProjectLayout,
    SourceRange,
    TextEdit,
)


class TestPosition:
    def test_requires_both_fields(self) -> None:
        with pytest.raises(ValidationError):
            Position(line=0)  # type: ignore[call-arg]

    def test_is_frozen(self) -> None:
        pos = Position(line=1, column=2)
        with pytest.raises(ValidationError):
            pos.line = 3  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        assert Position(line=1, column=2) == Position(line=1, column=2)
        assert len({Position(line=1, column=2), Position(line=1, column=2)}) == 1


class TestModuleDescriptor:
    def test_type_accepts_string_value(self) -> None:
        descriptor = ModuleDescriptor.model_validate({"name": "posts", "type": "route"})
        assert descriptor.type is ModuleKind.ROUTE

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            ModuleDescriptor.model_validate({"name": "posts", "type": "widget"})


class TestProjectLayout:
    def test_default_pod_prefix(self) -> None:
        assert ProjectLayout(root="/p").pod_module_prefix == "app"


class TestCompletionCandidate:
    def test_serializes_kind_as_number(self) -> None:
        start = Position(line=0, column=5)
        candidate = CompletionCandidate(
            kind=CompletionItemKind.Value,
            label="greeting",
            detail="en-us : hello",
            text_edit=TextEdit(range=SourceRange(start=start, end=start), new_text="greeting"),
        )
        data = candidate.model_dump(mode="json")
        assert data["kind"] == 12
        assert data["text_edit"]["range"]["start"] == {"line": 0, "column": 5}

    def test_text_edit_is_optional(self) -> None:
        candidate = CompletionCandidate(kind=CompletionItemKind.Class, label="foo", detail="component")
        assert candidate.text_edit is None
