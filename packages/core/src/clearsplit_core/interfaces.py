"""Collaborator interfaces for the document engine.

The engine only knows its persistence backend through this protocol.
It uses structural subtyping via typing.Protocol, so any class with
matching methods is compatible, with no inheritance required.

Example Usage:
    ```python
    class DictStorage:
        def __init__(self):
            self.saved = None

        def load(self):
            return self.saved

        def save(self, document):
            self.saved = document.to_json_dict()

    store = DocumentStore.from_storage(DictStorage())
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clearsplit_core.models import Document


@runtime_checkable
class DocumentStorage(Protocol):
    """Key-value persistence for the single document.

    Implementations hold one JSON value under one well-known key.
    """

    def load(self) -> Optional[dict[str, Any]]:
        """Return the persisted JSON object, or None when nothing is stored.

        Raises:
            StorageError: If the backend cannot be read or holds corrupt data.
        """
        ...

    def save(self, document: Document) -> None:
        """Persist the document, replacing any previous value.

        Raises:
            StorageError: If the write fails.
        """
        ...


__all__ = ["DocumentStorage"]
