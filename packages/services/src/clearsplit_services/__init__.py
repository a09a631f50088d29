"""Clearsplit Services - configuration, persistence, import/export and reports."""

__version__ = "0.1.0"

from .config import ClearsplitConfig, StorageBackend, StorageConfig
from .csv_ingest import append_contacts_csv, append_csv, parse_csv_rows
from .logging_setup import configure_logging
from .reports import ReportGenerator, build_calendar
from .session import configured_deadlines, open_store
from .storage import InMemoryStorage, JsonFileStorage, build_storage
from .transfer import export_document, export_filename, import_document, import_into_store

__all__ = [
    "ClearsplitConfig",
    "StorageConfig",
    "StorageBackend",
    "configure_logging",
    "InMemoryStorage",
    "JsonFileStorage",
    "build_storage",
    "open_store",
    "configured_deadlines",
    "export_document",
    "export_filename",
    "import_document",
    "import_into_store",
    "parse_csv_rows",
    "append_csv",
    "append_contacts_csv",
    "ReportGenerator",
    "build_calendar",
]
