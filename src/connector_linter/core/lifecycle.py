"""Document lifecycle controller.

Editor events are queued and handled one at a time by a single dispatcher
task, so validation never runs concurrently against the registry or the
compiler pool. Each event maps to one kind of re-validation:

==========================  =============================================
event                       effect
==========================  =============================================
DocumentOpened / Changed    validate that document
DocumentSaved               validate open documents that reference it
DocumentClosed              forget it and publish an empty set
ConfigurationChanged        reload settings, validate every open document
WatchedFilesChanged         reload settings if given, drop parsed schemas,
                            validate every open document
==========================  =============================================
"""

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from connector_linter.config.settings import SettingsContext
from connector_linter.core.diagnostics import Diagnostic
from connector_linter.core.documents import DocumentStore, TextDocument
from connector_linter.core.orchestrator import ValidationOrchestrator
from connector_linter.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentOpened:
    uri: str
    text: str
    version: int = 0


@dataclass(frozen=True)
class DocumentChanged:
    uri: str
    text: str
    version: int = 0


@dataclass(frozen=True)
class DocumentSaved:
    uri: str


@dataclass(frozen=True)
class DocumentClosed:
    uri: str


@dataclass(frozen=True)
class ConfigurationChanged:
    settings: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WatchedFilesChanged:
    uris: tuple[str, ...] = ()
    # host settings read alongside the file event, None when not supplied
    settings: Mapping[str, Any] | None = None


LifecycleEvent = (
    DocumentOpened
    | DocumentChanged
    | DocumentSaved
    | DocumentClosed
    | ConfigurationChanged
    | WatchedFilesChanged
)

_STOP = object()


class DiagnosticsPublisher(Protocol):
    """Receives full diagnostic sets for documents."""

    async def publish(self, uri: str, diagnostics: list[Diagnostic]) -> None:
        """Replace the diagnostics shown for ``uri``."""


class CollectingPublisher:
    """Publisher that keeps the latest set per document in memory."""

    def __init__(self) -> None:
        self.latest: dict[str, list[Diagnostic]] = {}
        self.history: list[tuple[str, list[Diagnostic]]] = []

    async def publish(self, uri: str, diagnostics: list[Diagnostic]) -> None:
        self.latest[uri] = list(diagnostics)
        self.history.append((uri, list(diagnostics)))


class DocumentLifecycleController:
    """Single-consumer event loop driving the orchestrator."""

    def __init__(
        self,
        orchestrator: ValidationOrchestrator,
        publisher: DiagnosticsPublisher,
        settings_context: SettingsContext | None = None,
        documents: DocumentStore | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.publisher = publisher
        self.settings_context = (
            settings_context or orchestrator.settings_context
        )
        self.documents = documents or DocumentStore()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._handlers = {
            DocumentOpened: self._on_content,
            DocumentChanged: self._on_content,
            DocumentSaved: self._on_saved,
            DocumentClosed: self._on_closed,
            ConfigurationChanged: self._on_configuration_changed,
            WatchedFilesChanged: self._on_watched_files_changed,
        }

    def submit(self, event: LifecycleEvent) -> None:
        """Queue an event for the dispatcher."""
        self._queue.put_nowait(event)

    def stop(self) -> None:
        """Ask ``run`` to return once earlier events are handled."""
        self._queue.put_nowait(_STOP)

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()

    async def run(self) -> None:
        """Consume events until ``stop`` is called."""
        while True:
            event = await self._queue.get()
            try:
                if event is _STOP:
                    return
                await self.dispatch(event)
            except Exception:
                logger.exception("Failed to handle %s", type(event).__name__)
            finally:
                self._queue.task_done()

    async def dispatch(self, event: LifecycleEvent) -> None:
        """Handle one event immediately."""
        handler = self._handlers.get(type(event))
        if handler is None:
            msg = f"Unsupported lifecycle event: {event!r}"
            raise TypeError(msg)
        await handler(event)

    async def _validate(self, document: TextDocument) -> None:
        diagnostics = self.orchestrator.validate(document.uri, document.text)
        if diagnostics is not None:
            await self.publisher.publish(document.uri, diagnostics)

    async def _validate_all(self, documents: Iterable[TextDocument]) -> None:
        for document in documents:
            await self._validate(document)

    async def _on_content(self, event: DocumentOpened | DocumentChanged) -> None:
        document = self.documents.put(event.uri, event.text, event.version)
        await self._validate(document)

    async def _on_saved(self, event: DocumentSaved) -> None:
        dependents = self.documents.dependents_of(event.uri)
        if dependents:
            logger.debug(
                "%s saved, re-validating %d dependent document(s)",
                event.uri,
                len(dependents),
            )
        await self._validate_all(dependents)

    async def _on_closed(self, event: DocumentClosed) -> None:
        self.documents.remove(event.uri)
        await self.publisher.publish(event.uri, [])

    async def _on_configuration_changed(
        self, event: ConfigurationChanged
    ) -> None:
        self.settings_context.reload(event.settings)
        await self._validate_all(self.documents.all())

    async def _on_watched_files_changed(
        self, event: WatchedFilesChanged
    ) -> None:
        logger.debug("Watched files changed: %s", ", ".join(event.uris))
        if event.settings is not None:
            self.settings_context.reload(event.settings)
        self.orchestrator.registry.invalidate()
        await self._validate_all(self.documents.all())
