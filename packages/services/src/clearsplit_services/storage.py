"""Persistence backends for the document.

Both backends satisfy ``clearsplit_core.interfaces.DocumentStorage``:
they hold a single JSON value under one well-known key.

- InMemoryStorage keeps the value in a dict (tests, throwaway sessions).
- JsonFileStorage keeps a JSON object file mapping key -> document, so
  several keys can share one file. Writes go to a temp file that then
  replaces the original, so a crash never leaves a half-written file.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from clearsplit_core.exceptions import ConfigurationError, StorageError
from clearsplit_core.models import Document

from .config import DEFAULT_STORAGE_KEY, StorageBackend, StorageConfig

logger = structlog.get_logger()


class InMemoryStorage:
    """Dict-backed storage."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY, initial: Optional[dict[str, Any]] = None):
        self.key = key
        self._values: dict[str, str] = {}
        self.save_count = 0
        if initial is not None:
            self._values[key] = json.dumps(initial)

    def load(self) -> Optional[dict[str, Any]]:
        raw = self._values.get(self.key)
        if raw is None:
            return None
        return json.loads(raw)

    def save(self, document: Document) -> None:
        self._values[self.key] = json.dumps(document.to_json_dict())
        self.save_count += 1


class JsonFileStorage:
    """JSON file storage.

    Args:
        path: Location of the JSON file. Parent directories are created
            on first save.
        key: Key the document is stored under inside the file.
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(
                f"Could not read {self.path}: {e}",
                operation="load",
                location=str(self.path),
            ) from e
        if not isinstance(data, dict):
            raise StorageError(
                f"Storage file {self.path} does not hold a JSON object",
                operation="load",
                location=str(self.path),
            )
        return data

    def load(self) -> Optional[dict[str, Any]]:
        value = self._read_all().get(self.key)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise StorageError(
                f"Value under {self.key!r} is not a JSON object",
                operation="load",
                location=str(self.path),
            )
        return value

    def save(self, document: Document) -> None:
        try:
            data = self._read_all()
        except StorageError:
            logger.warning("storage_file_replaced", path=str(self.path))
            data = {}
        data[self.key] = document.to_json_dict()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=self.path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(
                f"Could not write {self.path}: {e}",
                operation="save",
                location=str(self.path),
            ) from e
        logger.debug("document_saved", path=str(self.path))


def build_storage(config: StorageConfig) -> Union[InMemoryStorage, JsonFileStorage]:
    """Create the backend selected by configuration."""
    if config.backend == StorageBackend.MEMORY:
        return InMemoryStorage(key=config.key)
    if not config.path:
        raise ConfigurationError(
            "File storage requires a path",
            config_key="CLEARSPLIT_STORAGE_PATH",
            expected="Path to a writable JSON file",
        )
    return JsonFileStorage(config.path, key=config.key)


__all__ = ["InMemoryStorage", "JsonFileStorage", "build_storage"]
