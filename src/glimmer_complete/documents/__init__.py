from glimmer_complete.documents.memory import InMemoryDocumentStore
from glimmer_complete.documents.text_document import TextDocument, uri_to_file_path

__all__ = [
    "InMemoryDocumentStore",
    "TextDocument",
    "uri_to_file_path",
]
