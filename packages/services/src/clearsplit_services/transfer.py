"""Export and import of the whole document.

Export writes the document's JSON, optionally obfuscated with a
passphrase (see ``obfuscation``; this is not encryption). Import reverses
that and replaces the document wholesale. Import fails closed: any
problem raises MalformedImportError before the store is touched, and a
successful import is exactly one ``DocumentStore.set`` call.
"""

import json
from datetime import date
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from clearsplit_core.exceptions import MalformedImportError
from clearsplit_core.ids import IdGenerator
from clearsplit_core.models import Document
from clearsplit_core.reconcile import DEFAULT_JURISDICTION, reconcile
from clearsplit_core.store import DocumentStore

from .obfuscation import deobfuscate, obfuscate

logger = structlog.get_logger()

IMPORT_FAILED = "Import failed. Check password and file."


def export_document(document: Document, passphrase: str = "") -> str:
    """Serialize the document, obfuscated when a passphrase is given."""
    plain = json.dumps(document.to_json_dict())
    payload = obfuscate(plain, passphrase)
    logger.info("document_exported", obfuscated=bool(passphrase), size=len(payload))
    return payload


def export_filename(today: Optional[date] = None) -> str:
    """Default export file name, e.g. ``financial-organizer-2025-01-31.json``."""
    return f"financial-organizer-{(today or date.today()).isoformat()}.json"


def import_document(
    payload: Union[str, bytes],
    passphrase: str = "",
    id_gen: Optional[IdGenerator] = None,
    jurisdiction: str = DEFAULT_JURISDICTION,
    source: Optional[str] = None,
) -> Document:
    """Parse an export payload into a complete Document.

    With a passphrase, the payload is de-obfuscated first; a payload that
    cannot be de-obfuscated is tried as plain JSON, so unprotected files
    still import.

    Raises:
        MalformedImportError: If the payload is not a JSON document object.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedImportError(IMPORT_FAILED, stage="decode", source=source) from e

    text = payload
    if passphrase:
        try:
            text = deobfuscate(payload, passphrase)
        except ValueError:
            logger.debug("import_not_obfuscated", source=source)
            text = payload

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedImportError(
            IMPORT_FAILED,
            stage="parse",
            source=source,
            details={"error": str(e)},
        ) from e

    if not isinstance(data, dict):
        raise MalformedImportError(IMPORT_FAILED, stage="validate", source=source)

    try:
        return reconcile(data, id_gen=id_gen, jurisdiction=jurisdiction)
    except ValidationError as e:
        raise MalformedImportError(
            IMPORT_FAILED,
            stage="validate",
            source=source,
            details={"errors": e.error_count()},
        ) from e


def import_into_store(
    store: DocumentStore,
    payload: Union[str, bytes],
    passphrase: str = "",
    id_gen: Optional[IdGenerator] = None,
    jurisdiction: str = DEFAULT_JURISDICTION,
    source: Optional[str] = None,
) -> Document:
    """Import a payload and commit it, or raise leaving the store untouched.

    Pass the configured ``default_jurisdiction`` so an imported profile
    without one is filled the same way a freshly opened session is.
    """
    try:
        document = import_document(
            payload, passphrase, id_gen=id_gen, jurisdiction=jurisdiction, source=source
        )
    except MalformedImportError as e:
        logger.warning("import_rejected", stage=e.stage, source=source)
        raise
    store.set(document)
    logger.info("document_imported", source=source)
    return document


__all__ = [
    "IMPORT_FAILED",
    "export_document",
    "export_filename",
    "import_document",
    "import_into_store",
]
