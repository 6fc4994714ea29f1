import logging

from glimmer_complete.documents.text_document import TextDocument

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Open documents keyed by URI; implements the ``DocumentStore`` protocol."""

    def __init__(self) -> None:
        self.documents: dict[str, TextDocument] = {}

    def open(self, uri: str, text: str, version: int = 0) -> TextDocument:
        document = TextDocument(uri, text, version)
        self.documents[uri] = document
        logger.debug("Opened %s (version %d)", uri, version)
        return document

    def close(self, uri: str) -> None:
        self.documents.pop(uri, None)

    def get(self, uri: str) -> TextDocument | None:
        return self.documents.get(uri)
