"""Translation-key completion for ``t`` helper calls in templates and scripts."""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from lsprotocol.types import CompletionItemKind

from glimmer_complete.core.ast_path import AstPath
from glimmer_complete.core.focus import insert_placeholder, template_focus_path
from glimmer_complete.core.languages import TEMPLATE_LANGUAGE, language_for_path
from glimmer_complete.core.ports.documents import DocumentStore
from glimmer_complete.core.ports.files import FileSource
from glimmer_complete.core.ports.parser import TemplateParser
from glimmer_complete.core.ports.projects import ProjectResolver
from glimmer_complete.core.script_ast import find_translation_argument
from glimmer_complete.core.template_ast import MustacheStatement, PathExpression, StringLiteral, SubExpression
from glimmer_complete.core.template_parser import GlimmerParser
from glimmer_complete.documents.text_document import TextDocument, uri_to_file_path
from glimmer_complete.models import CompletionCandidate, Position, SourceRange, TextEdit, TranslationEntry

logger = logging.getLogger(__name__)

TRANSLATION_HELPER = "t"

_TRANSLATION_SUFFIXES = (".json", ".yaml", ".yml")


def flatten_translations(data: Mapping[Any, Any], prefix: str = "") -> Iterator[tuple[str, str]]:
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            yield from flatten_translations(value, name)
        elif value is not None:
            yield name, str(value)


def _load_document(source: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(source)
    return yaml.safe_load(source)


def load_translations(root: str | Path, files: FileSource, directory: str) -> dict[str, list[TranslationEntry]]:
    """Read every locale file below ``root/directory`` into a key -> entries map.

    The locale is the file's base name, so ``translations/sub/en-us.yaml``
    contributes to ``en-us``. Keys keep file order.
    """
    base = Path(root) / directory
    translations: dict[str, list[TranslationEntry]] = {}
    for relative in files.list_files(base):
        suffix = PurePosixPath(relative).suffix.lower()
        if suffix not in _TRANSLATION_SUFFIXES:
            continue
        source = files.read_text(base / relative)
        if source is None:
            continue
        try:
            data = _load_document(source, suffix)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            logger.warning("Skipping unreadable translation file %s: %s", base / relative, exc)
            continue
        if not isinstance(data, Mapping):
            continue
        locale = PurePosixPath(relative).stem
        for key, text in flatten_translations(data):
            translations.setdefault(key, []).append(TranslationEntry(locale=locale, text=text))
    logger.debug("Loaded %d translation key(s) from %s", len(translations), base)
    return translations


def is_translation_key_path(path: AstPath) -> bool:
    """True when the focus is the first argument of ``{{t "..."}}`` or ``(t "...")``."""
    node = path.node
    if not isinstance(node, StringLiteral):
        return False
    parent = path.parent
    if not isinstance(parent, (MustacheStatement, SubExpression)):
        return False
    if not isinstance(parent.path, PathExpression) or parent.path.original != TRANSLATION_HELPER:
        return False
    return bool(parent.params) and parent.params[0] is node


class IntlCompletionProvider:
    def __init__(
        self,
        documents: DocumentStore,
        projects: ProjectResolver,
        parser: TemplateParser | None = None,
        placeholder: str = "GlimmerCompletionDummy",
        translations_dir: str = "translations",
    ) -> None:
        self.documents = documents
        self.projects = projects
        self.parser = parser or GlimmerParser()
        self.placeholder = placeholder
        self.translations_dir = translations_dir

    def provide_completions(self, uri: str, position: Position) -> list[CompletionCandidate]:
        file_path = uri_to_file_path(uri)
        language = language_for_path(file_path) if file_path else None
        if file_path is None or language is None:
            return []
        project = self.projects.project_for_path(file_path)
        if project is None:
            return []
        document = self.documents.get(uri)
        if document is None:
            return []

        if language == TEMPLATE_LANGUAGE:
            found = self._template_key(document, position)
        else:
            found = self._script_key(document, position, language)
        if found is None:
            return []

        query, start = found
        translations = load_translations(project.root, project.files, self.translations_dir)
        edit_range = SourceRange(start=start, end=start)
        return [
            CompletionCandidate(
                kind=CompletionItemKind.Value,
                label=key,
                detail=f"{entries[0].locale} : {entries[0].text}",
                text_edit=TextEdit(range=edit_range, new_text=key),
            )
            for key, entries in translations.items()
            if key.startswith(query)
        ]

    def _template_key(self, document: TextDocument, position: Position) -> tuple[str, Position] | None:
        focus = template_focus_path(document, position, self.parser, self.placeholder)
        if focus is None or not is_translation_key_path(focus):
            return None
        node = focus.node
        assert isinstance(node, StringLiteral) and node.loc is not None
        content_start = Position(line=node.loc.start.line, column=node.loc.start.column + 1)
        return node.value.replace(self.placeholder, ""), document.wire_position(content_start)

    def _script_key(self, document: TextDocument, position: Position, language: str) -> tuple[str, Position] | None:
        offset = document.offset_at(position)
        patched = insert_placeholder(document.get_text(), offset, self.placeholder)
        source_bytes = patched.encode("utf-8")
        argument = find_translation_argument(source_bytes, len(patched[:offset].encode("utf-8")), language)
        if argument is None:
            return None
        content_offset = len(source_bytes[: argument.start_byte].decode("utf-8"))
        return argument.value.replace(self.placeholder, ""), document.position_at(content_offset)
