import logging

from glimmer_complete.config import Settings, get_settings
from glimmer_complete.core.candidates import gather_candidates
from glimmer_complete.core.context import CompletionContext, classify
from glimmer_complete.core.focus import template_focus_path, text_prefix
from glimmer_complete.core.fuzzy import fuzzy_filter
from glimmer_complete.core.intl import IntlCompletionProvider
from glimmer_complete.core.languages import TEMPLATE_LANGUAGE, language_for_path
from glimmer_complete.core.ports.documents import DocumentStore
from glimmer_complete.core.ports.fuzzy import FuzzyFilter
from glimmer_complete.core.ports.parser import TemplateParser
from glimmer_complete.core.ports.projects import ProjectResolver
from glimmer_complete.core.template_parser import GlimmerParser
from glimmer_complete.documents.text_document import uri_to_file_path
from glimmer_complete.models import CompletionCandidate, Position

logger = logging.getLogger(__name__)


class TemplateCompletionProvider:
    """Completes component, helper, keyword and route names inside templates."""

    def __init__(
        self,
        documents: DocumentStore,
        projects: ProjectResolver,
        parser: TemplateParser | None = None,
        fuzzy: FuzzyFilter | None = None,
        placeholder: str = "GlimmerCompletionDummy",
    ) -> None:
        self.documents = documents
        self.projects = projects
        self.parser = parser or GlimmerParser()
        self.fuzzy = fuzzy or fuzzy_filter
        self.placeholder = placeholder

    def provide_completions(self, uri: str, position: Position) -> list[CompletionCandidate]:
        file_path = uri_to_file_path(uri)
        if file_path is None or language_for_path(file_path) != TEMPLATE_LANGUAGE:
            return []
        project = self.projects.project_for_path(file_path)
        if project is None:
            return []
        document = self.documents.get(uri)
        if document is None:
            return []

        focus = template_focus_path(document, position, self.parser, self.placeholder)
        if focus is None:
            return []
        context = classify(focus)
        if context is CompletionContext.NONE:
            return []

        candidates = gather_candidates(context, project)
        query = text_prefix(focus, self.placeholder)
        logger.debug("Filtering %d candidate(s) for %s with %r", len(candidates), context.value, query)
        return self.fuzzy(candidates, query, key=lambda candidate: candidate.label)


class CompletionEngine:
    """Entry point combining template and translation completions for one request."""

    def __init__(
        self,
        documents: DocumentStore,
        projects: ProjectResolver,
        parser: TemplateParser | None = None,
        fuzzy: FuzzyFilter | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.documents = documents
        self.projects = projects
        self.template = TemplateCompletionProvider(documents, projects, parser, fuzzy, settings.placeholder)
        self.intl = IntlCompletionProvider(
            documents, projects, parser, settings.placeholder, settings.translations_dir
        )

    def provide_completions(self, uri: str, position: Position) -> list[CompletionCandidate]:
        results = [
            *self.template.provide_completions(uri, position),
            *self.intl.provide_completions(uri, position),
        ]
        logger.info("Completed %s at %d:%d with %d item(s)", uri, position.line, position.column, len(results))
        return results
