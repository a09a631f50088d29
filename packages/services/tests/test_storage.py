"""Tests for persistence backends."""

import json

import pytest

from clearsplit_core.exceptions import ConfigurationError, StorageError
from clearsplit_core.interfaces import DocumentStorage
from clearsplit_core.store import DocumentStore
from clearsplit_services.config import ClearsplitConfig, StorageBackend, StorageConfig
from clearsplit_services.session import open_store
from clearsplit_services.storage import InMemoryStorage, JsonFileStorage, build_storage


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_empty(self):
        assert InMemoryStorage().load() is None

    def test_save_and_load(self, document):
        storage = InMemoryStorage()
        storage.save(document)

        assert storage.load() == document.to_json_dict()
        assert storage.save_count == 1

    def test_loaded_value_is_a_copy(self, document):
        storage = InMemoryStorage()
        storage.save(document)
        storage.load()["notes"] = "changed"
        assert storage.load()["notes"] == ""

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryStorage(), DocumentStorage)


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_file(self, tmp_path):
        assert JsonFileStorage(tmp_path / "none.json").load() is None

    def test_save_creates_file(self, tmp_path, document):
        path = tmp_path / "nested" / "doc.json"
        storage = JsonFileStorage(path, key="k")
        storage.save(document)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"k": document.to_json_dict()}
        assert storage.load() == document.to_json_dict()

    def test_keys_share_file(self, tmp_path, document):
        path = tmp_path / "doc.json"
        JsonFileStorage(path, key="a").save(document)
        JsonFileStorage(path, key="b").save(document.evolve(notes="b"))

        assert JsonFileStorage(path, key="a").load()["notes"] == ""
        assert JsonFileStorage(path, key="b").load()["notes"] == "b"

    def test_no_temp_files_left(self, tmp_path, document):
        JsonFileStorage(tmp_path / "doc.json").save(document)
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]

    def test_corrupt_file_raises_on_load(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            JsonFileStorage(path).load()
        assert exc_info.value.operation == "load"

    def test_corrupt_file_replaced_on_save(self, tmp_path, document):
        path = tmp_path / "doc.json"
        path.write_text("[1, 2]", encoding="utf-8")

        storage = JsonFileStorage(path)
        storage.save(document)
        assert storage.load() == document.to_json_dict()

    def test_non_object_value(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"financial-organizer:v1": [1]}), encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStorage(path).load()

    def test_store_persists_and_reloads(self, tmp_path, id_gen):
        storage = JsonFileStorage(tmp_path / "doc.json")
        store = DocumentStore.from_storage(storage, id_gen=id_gen)
        store.set(lambda d: d.evolve(notes="saved"))

        reopened = DocumentStore.from_storage(JsonFileStorage(tmp_path / "doc.json"), id_gen=id_gen)
        assert reopened.present == store.present


class TestBuildStorage:
    """Tests for build_storage and open_store."""

    def test_memory(self):
        storage = build_storage(StorageConfig(backend=StorageBackend.MEMORY, key="k"))
        assert isinstance(storage, InMemoryStorage)
        assert storage.key == "k"

    def test_file(self, tmp_path):
        storage = build_storage(StorageConfig(backend="file", path=str(tmp_path / "x.json")))
        assert isinstance(storage, JsonFileStorage)

    def test_file_without_path(self):
        with pytest.raises(ConfigurationError):
            build_storage(StorageConfig(backend="file", path=None))

    def test_open_store(self, clean_env, id_gen):
        config = ClearsplitConfig(
            storage=StorageConfig(backend=StorageBackend.MEMORY),
            history_limit=3,
            default_jurisdiction="WA",
        )
        store = open_store(config, id_gen=id_gen, setup_logging=False)

        assert store.history_limit == 3
        assert store.present.profile.jurisdiction == "WA"
        assert store.present.divorce.filing_state == "WA"
