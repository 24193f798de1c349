"""Tests for the persisted session slot."""

from pathlib import Path

import pytest

from hrm_access.security.storage import CURRENT_USER_KEY, FileSessionStorage, InMemorySessionStorage


def test_in_memory_roundtrip():
    storage = InMemorySessionStorage()
    assert storage.get(CURRENT_USER_KEY) is None
    storage.set(CURRENT_USER_KEY, "token")
    assert storage.get(CURRENT_USER_KEY) == "token"
    storage.delete(CURRENT_USER_KEY)
    storage.delete(CURRENT_USER_KEY)
    assert storage.get(CURRENT_USER_KEY) is None


def test_file_storage_missing_file_reads_empty(tmp_path):
    storage = FileSessionStorage(tmp_path / "nested" / "session.json")
    assert storage.get(CURRENT_USER_KEY) is None
    storage.delete(CURRENT_USER_KEY)


def test_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "session.json"
    FileSessionStorage(path).set(CURRENT_USER_KEY, "token")
    assert FileSessionStorage(path).get(CURRENT_USER_KEY) == "token"

    FileSessionStorage(path).delete(CURRENT_USER_KEY)
    assert FileSessionStorage(path).get(CURRENT_USER_KEY) is None


def test_file_storage_corrupt_file_reads_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    storage = FileSessionStorage(path)
    assert storage.get(CURRENT_USER_KEY) is None

    storage.set(CURRENT_USER_KEY, "fresh")
    assert storage.get(CURRENT_USER_KEY) == "fresh"


def test_file_storage_non_object_reads_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert FileSessionStorage(path).get(CURRENT_USER_KEY) is None


def test_file_storage_failed_write_keeps_previous_contents(tmp_path, monkeypatch):
    path = tmp_path / "session.json"
    storage = FileSessionStorage(path)
    storage.set(CURRENT_USER_KEY, "old-token")

    def boom(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", boom)
    with pytest.raises(OSError):
        storage.set(CURRENT_USER_KEY, "new-token")
    monkeypatch.undo()

    assert storage.get(CURRENT_USER_KEY) == "old-token"
    assert [p.name for p in tmp_path.iterdir()] == ["session.json"]
