from typing import Protocol

from glimmer_complete.documents.text_document import TextDocument


class DocumentStore(Protocol):
    def get(self, uri: str) -> TextDocument | None: ...
