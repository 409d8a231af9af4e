"""Unit tests for the key-value storage module."""
import pytest

from mentorchat.storage import (
    InMemoryStorage,
    JSONFileStorage,
    KeyValueStorage,
    create_storage,
)


class TestStorageInterface:
    """Tests for the abstract KeyValueStorage interface."""

    def test_storage_is_abstract(self):
        """Test that KeyValueStorage cannot be instantiated directly."""
        with pytest.raises(TypeError):
            KeyValueStorage()  # type: ignore


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_get_missing_key_returns_none(self):
        storage = InMemoryStorage()
        assert storage.get("nope") is None
        assert storage.get_json("nope") is None

    def test_json_round_trip(self):
        storage = InMemoryStorage()
        storage.set_json("doc", {"a": [1, 2], "b": "é"})
        assert storage.get_json("doc") == {"a": [1, 2], "b": "é"}
        assert storage.keys() == ["doc"]

    def test_invalid_json_raises_value_error(self):
        storage = InMemoryStorage({"doc": "{broken"})
        with pytest.raises(ValueError):
            storage.get_json("doc")

    def test_delete(self):
        storage = InMemoryStorage({"doc": "1"})
        storage.delete("doc")
        storage.delete("doc")
        assert storage.get("doc") is None


class TestJSONFileStorage:
    """Tests for JSONFileStorage."""

    def test_writes_one_file_per_key(self, tmp_path):
        storage = JSONFileStorage(tmp_path / "data")
        storage.set_json("smp_chats_v1", [])
        storage.set_json("smp_profile_v1", {})

        assert (tmp_path / "data" / "smp_chats_v1.json").read_text(encoding="utf-8") == "[]"
        assert storage.keys() == ["smp_chats_v1", "smp_profile_v1"]

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        storage.set("k", "1")
        storage.set("k", "2")

        assert storage.get("k") == "2"
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_missing_directory_has_no_keys(self, tmp_path):
        storage = JSONFileStorage(tmp_path / "absent")
        assert storage.keys() == []
        assert storage.get("k") is None

    def test_rejects_path_like_keys(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        with pytest.raises(ValueError, match="Invalid storage key"):
            storage.set("../escape", "1")

    def test_delete_missing_key_is_noop(self, tmp_path):
        JSONFileStorage(tmp_path).delete("k")


class TestStorageFactory:
    """Tests for storage factory function."""

    def test_create_memory_storage(self):
        storage = create_storage("memory")
        assert isinstance(storage, InMemoryStorage)
        assert storage.backend_type == "memory"

    def test_create_json_storage(self, tmp_path):
        storage = create_storage("json", path=tmp_path)
        assert isinstance(storage, JSONFileStorage)
        assert storage.backend_type == "json"
        assert storage.root == tmp_path

    def test_unknown_backend_raises(self):
        with pytest.raises(ValueError, match="Unsupported storage backend"):
            create_storage("redis")
