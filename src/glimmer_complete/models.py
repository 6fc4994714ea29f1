from enum import Enum

from lsprotocol.types import CompletionItemKind
from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class SourceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class ModuleKind(str, Enum):
    COMPONENT = "component"
    ROUTE = "route"
    CONTROLLER = "controller"
    TEMPLATE = "template"
    HELPER = "helper"
    MODIFIER = "modifier"
    SERVICE = "service"
    MODEL = "model"
    ADAPTER = "adapter"
    SERIALIZER = "serializer"
    TRANSFORM = "transform"
    UTIL = "util"


class ModuleDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: ModuleKind


class ProjectLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    root: str
    pod_module_prefix: str = "app"


class TextEdit(BaseModel):
    range: SourceRange
    new_text: str


class CompletionCandidate(BaseModel):
    kind: CompletionItemKind
    label: str
    detail: str
    text_edit: TextEdit | None = None


class TranslationEntry(BaseModel):
    locale: str
    text: str
