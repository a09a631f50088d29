"""Document store with bounded undo/redo history.

The store owns the one canonical Document and is the only place a change
is committed. Every other component reads the current snapshot and
recomputes from it; nothing caches derived state.

History is three parts: ``past`` (at most ``history_limit`` snapshots,
oldest first), ``present``, and ``future`` (most recently undone first).
A new commit clears ``future``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, Union

import structlog

from .exceptions import StorageError
from .ids import IdGenerator
from .interfaces import DocumentStorage
from .models import Document
from .reconcile import DEFAULT_JURISDICTION, reconcile

logger = structlog.get_logger()

HISTORY_LIMIT = 10

Updater = Union[Document, Callable[[Document], Document]]
Listener = Callable[[Document], None]


@dataclass(frozen=True)
class HistoryState:
    """An immutable view of the store's history."""

    past: tuple[Document, ...]
    present: Document
    future: tuple[Document, ...]


class DocumentStore:
    """Holds the current Document and its undo/redo history.

    Each successful ``set``, ``undo`` or ``redo`` saves the new present to
    the storage collaborator, if one is attached. A failed save is logged
    and does not roll back the transition.

    Args:
        initial: The document the session starts with.
        storage: Optional persistence backend.
        history_limit: Maximum number of snapshots kept on the undo side.
    """

    def __init__(
        self,
        initial: Document,
        storage: Optional[DocumentStorage] = None,
        history_limit: int = HISTORY_LIMIT,
    ):
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self._state = HistoryState(past=(), present=initial, future=())
        self._storage = storage
        self._history_limit = history_limit
        self._listeners: list[Listener] = []

    @classmethod
    def from_storage(
        cls,
        storage: DocumentStorage,
        id_gen: Optional[IdGenerator] = None,
        jurisdiction: str = DEFAULT_JURISDICTION,
        history_limit: int = HISTORY_LIMIT,
    ) -> "DocumentStore":
        """Start a session from whatever the backend holds, merged with defaults.

        An unreadable backend is treated as empty.
        """
        try:
            loaded = storage.load()
        except StorageError as e:
            logger.warning("storage_load_failed", error=e.message, **e.details)
            loaded = None

        document = reconcile(loaded, id_gen=id_gen, jurisdiction=jurisdiction)
        logger.info("document_loaded", from_storage=loaded is not None)
        return cls(document, storage=storage, history_limit=history_limit)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def present(self) -> Document:
        return self._state.present

    @property
    def past(self) -> tuple[Document, ...]:
        return self._state.past

    @property
    def future(self) -> tuple[Document, ...]:
        return self._state.future

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def history_limit(self) -> int:
        return self._history_limit

    @property
    def can_undo(self) -> bool:
        return bool(self._state.past)

    @property
    def can_redo(self) -> bool:
        return bool(self._state.future)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def set(self, updater: Updater) -> None:
        """Commit a new document.

        Args:
            updater: Either the next Document, or a function from the
                current Document to the next one.
        """
        current = self._state.present
        next_document = updater(current) if callable(updater) else updater
        if not isinstance(next_document, Document):
            raise TypeError(
                f"Updater must produce a Document, got {type(next_document).__name__}"
            )

        past = (*self._state.past, current)[-self._history_limit:]
        self._state = HistoryState(past=past, present=next_document, future=())
        logger.debug("history_commit", past=len(past))
        self._committed()

    def undo(self) -> None:
        """Step back one snapshot. No-op when there is nothing to undo."""
        state = self._state
        if not state.past:
            return

        previous = state.past[-1]
        self._state = HistoryState(
            past=state.past[:-1],
            present=previous,
            future=(state.present, *state.future),
        )
        logger.debug("history_undo", past=len(self._state.past), future=len(self._state.future))
        self._committed()

    def redo(self) -> None:
        """Re-apply the most recently undone snapshot. No-op when none."""
        state = self._state
        if not state.future:
            return

        following, *remaining = state.future
        self._state = HistoryState(
            past=(*state.past, state.present)[-self._history_limit:],
            present=following,
            future=tuple(remaining),
        )
        logger.debug("history_redo", past=len(self._state.past), future=len(self._state.future))
        self._committed()

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new present after every transition.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _committed(self) -> None:
        present = self._state.present
        self._persist(present)
        for listener in list(self._listeners):
            listener(present)

    def _persist(self, document: Document) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save(document)
        except StorageError as e:
            logger.warning("storage_save_failed", error=e.message, **e.details)


__all__ = ["HISTORY_LIMIT", "HistoryState", "DocumentStore", "Updater"]
