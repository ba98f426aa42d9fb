"""Open documents and the files each one references."""

from dataclasses import dataclass, field

from connector_linter.core import parsing
from connector_linter.core.orchestrator import document_file_name
from connector_linter.exceptions import DocumentParseError


@dataclass(frozen=True)
class TextDocument:
    """Snapshot of an open document.

    Attributes:
        uri: Document URI
        text: Full text at ``version``
        version: Editor version counter
        references: Lower-cased file names the document points at

    """

    uri: str
    text: str
    version: int = 0
    references: frozenset[str] = field(default_factory=frozenset)

    @property
    def file_name(self) -> str:
        return document_file_name(self.uri)

    def depends_on(self, file_name: str) -> bool:
        """True if this document references ``file_name``."""
        return file_name.lower() in self.references


def _references_in(text: str) -> frozenset[str]:
    try:
        return parsing.referenced_file_names(parsing.loads(text))
    except DocumentParseError:
        return frozenset()


class DocumentStore:
    """Open documents keyed by URI, in open order."""

    def __init__(self) -> None:
        self._documents: dict[str, TextDocument] = {}

    def __contains__(self, uri: str) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def put(self, uri: str, text: str, version: int = 0) -> TextDocument:
        """Store the latest text of a document and recompute its references."""
        document = TextDocument(uri, text, version, _references_in(text))
        self._documents[uri] = document
        return document

    def get(self, uri: str) -> TextDocument | None:
        return self._documents.get(uri)

    def remove(self, uri: str) -> TextDocument | None:
        return self._documents.pop(uri, None)

    def all(self) -> list[TextDocument]:
        return list(self._documents.values())

    def dependents_of(self, uri: str) -> list[TextDocument]:
        """Other open documents that reference the file behind ``uri``."""
        file_name = document_file_name(uri)
        return [
            document
            for document in self._documents.values()
            if document.uri != uri and document.depends_on(file_name)
        ]
