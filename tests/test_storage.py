"""Tests for the JSON file key-value storage."""

import json

import pytest

from tasktimer.tracker.storage import TASKS_KEY, LocalStorage, encode_tasks


class TestLocalStorage:
    """Tests for the LocalStorage class."""

    def test_missing_file_reads_empty(self, tmp_path):
        """A missing file behaves like empty storage."""
        storage = LocalStorage(tmp_path / "missing.json")

        assert storage.get_item(TASKS_KEY) is None
        assert storage.keys() == []
        assert not storage.path.exists()

    def test_set_and_get(self, tmp_path):
        """A stored value is read back unchanged."""
        storage = LocalStorage(tmp_path / "storage.json")
        storage.set_item("greeting", "hello")

        assert storage.get_item("greeting") == "hello"

    def test_set_overwrites(self, tmp_path):
        """Setting a key replaces the prior value."""
        storage = LocalStorage(tmp_path / "storage.json")
        storage.set_item("k", "one")
        storage.set_item("k", "two")

        assert storage.get_item("k") == "two"

    def test_keys_are_independent(self, tmp_path):
        """Writing one key leaves the others alone."""
        storage = LocalStorage(tmp_path / "storage.json")
        storage.set_item("a", "1")
        storage.set_item("b", "2")

        assert storage.get_item("a") == "1"
        assert sorted(storage.keys()) == ["a", "b"]

    def test_remove_item(self, tmp_path):
        """remove_item() deletes a slot and reports whether it existed."""
        storage = LocalStorage(tmp_path / "storage.json")
        storage.set_item("k", "v")

        assert storage.remove_item("k") is True
        assert storage.get_item("k") is None
        assert storage.remove_item("k") is False

    def test_creates_parent_directories(self, tmp_path):
        """Writing creates missing parent directories."""
        path = tmp_path / "nested" / "dir" / "storage.json"
        storage = LocalStorage(path)
        storage.set_item("k", "v")

        assert path.exists()

    def test_file_is_a_json_object_of_strings(self, tmp_path):
        """The file layout is a flat JSON object."""
        path = tmp_path / "storage.json"
        storage = LocalStorage(path)
        storage.set_item(TASKS_KEY, "[]")

        assert json.loads(path.read_text()) == {TASKS_KEY: "[]"}

    def test_lock_file_beside_storage(self, tmp_path):
        """The lock lives next to the storage file."""
        storage = LocalStorage(tmp_path / "storage.json")
        storage.set_item("k", "v")

        assert (tmp_path / "storage.json.lock").exists()

    def test_lock_path_never_equals_data_path(self, tmp_path):
        """A storage file named *.lock still gets a separate lock file."""
        storage = LocalStorage(tmp_path / "state.lock")
        storage.set_item("k", "v")

        assert storage.get_item("k") == "v"
        assert (tmp_path / "state.lock.lock").exists()

    def test_write_leaves_no_temp_file(self, tmp_path):
        """Writes go through a temp file that is renamed into place."""
        storage = LocalStorage(tmp_path / "storage.json")
        storage.set_item("k", "v")
        storage.set_item("k", "w")

        assert not (tmp_path / "storage.json.tmp").exists()
        assert storage.get_item("k") == "w"

    def test_failed_write_keeps_previous_contents(self, tmp_path, monkeypatch):
        """If the rename fails, the old file is untouched."""
        path = tmp_path / "storage.json"
        storage = LocalStorage(path)
        storage.set_item("k", "old")
        before = path.read_text()

        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("tasktimer.tracker.storage.os.replace", fail)
        with pytest.raises(OSError):
            storage.set_item("k", "new")

        assert path.read_text() == before

    def test_unreadable_file_reads_empty(self, tmp_path):
        """Invalid JSON is treated as empty storage."""
        path = tmp_path / "storage.json"
        path.write_text("{not json")
        storage = LocalStorage(path)

        assert storage.get_item("k") is None

    def test_non_object_file_reads_empty(self, tmp_path):
        """A JSON value other than an object is treated as empty."""
        path = tmp_path / "storage.json"
        path.write_text("[1, 2, 3]")
        storage = LocalStorage(path)

        assert storage.keys() == []

    def test_non_string_values_are_skipped(self, tmp_path):
        """Only string values are exposed."""
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({"good": "yes", "bad": 5}))
        storage = LocalStorage(path)

        assert storage.get_item("good") == "yes"
        assert storage.get_item("bad") is None

    def test_blank_file_reads_empty(self, tmp_path):
        """A whitespace-only file is treated as empty."""
        path = tmp_path / "storage.json"
        path.write_text("  \n")
        storage = LocalStorage(path)

        assert storage.keys() == []

    def test_tilde_is_expanded(self, tmp_path, monkeypatch):
        """Paths starting with ~ resolve under the home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))
        storage = LocalStorage("~/storage.json")

        assert storage.path == tmp_path / "storage.json"


class TestEncodeTasks:
    """Tests for encode_tasks()."""

    def test_compact_separators(self):
        """Output has no whitespace between tokens."""
        raw = encode_tasks([{"id": 1, "name": "A", "timeSpent": 0, "isRunning": False}])

        assert raw == '[{"id":1,"name":"A","timeSpent":0,"isRunning":false}]'

    def test_non_ascii_kept(self):
        """Non-ASCII names are written as-is."""
        assert encode_tasks([{"name": "Café"}]) == '[{"name":"Café"}]'
