"""JSON file persistence for tracker state.

This module provides a small key-value store backed by a single JSON
file, with file locking for concurrent access safety. Values are opaque
strings, so callers decide how to encode what they store.
"""

import json
import logging
import os
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)

# Slot holding the serialized task list
TASKS_KEY = "timeTrackerTasks"


class LocalStorage:
    """JSON file-based key-value storage.

    The file holds one JSON object mapping string keys to string values.
    Every read and write holds a lock on a sibling ``.lock`` file.

    Example:
        storage = LocalStorage("/path/to/storage.json")
        storage.set_item("timeTrackerTasks", "[]")
        raw = storage.get_item("timeTrackerTasks")
    """

    def __init__(self, path: str | Path, lock_timeout: float = 10.0) -> None:
        """Initialize the storage.

        Args:
            path: Path to the JSON storage file.
            lock_timeout: Seconds to wait for the file lock.
        """
        self._path = Path(path).expanduser()
        self._lock_path = self._path.with_name(self._path.name + ".lock")
        self._lock = FileLock(str(self._lock_path), timeout=lock_timeout)

    @property
    def path(self) -> Path:
        """Get the storage file path."""
        return self._path

    def _read_data(self) -> dict[str, str]:
        """Read and parse the storage file.

        Returns:
            Stored key-value pairs; empty if the file is missing or unusable.
        """
        if not self._path.exists():
            return {}

        content = self._path.read_text(encoding="utf-8")
        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable storage file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self._path}: expected a JSON object")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_data(self, data: dict[str, str]) -> None:
        """Write key-value pairs to the storage file.

        Args:
            data: Data to write.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(data, indent=2, ensure_ascii=False)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, self._path)

    def get_item(self, key: str) -> str | None:
        """Get the value stored under a key.

        Args:
            key: Slot name.

        Returns:
            The stored string, or None if the slot is empty.
        """
        with self._lock:
            return self._read_data().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value, overwriting any prior value.

        Args:
            key: Slot name.
            value: String to store.
        """
        with self._lock:
            data = self._read_data()
            data[key] = value
            self._write_data(data)
            logger.debug(f"Wrote {len(value)} chars to '{key}' in {self._path}")

    def remove_item(self, key: str) -> bool:
        """Remove a slot.

        Args:
            key: Slot name.

        Returns:
            True if the slot existed and was removed.
        """
        with self._lock:
            data = self._read_data()
            if key not in data:
                return False
            del data[key]
            self._write_data(data)
            logger.debug(f"Removed '{key}' from {self._path}")
            return True

    def keys(self) -> list[str]:
        """List stored slot names."""
        with self._lock:
            return list(self._read_data())


def encode_tasks(tasks: list[dict]) -> str:
    """Encode a task list the way ``JSON.stringify`` would.

    Args:
        tasks: Tasks in persisted layout.

    Returns:
        Compact JSON array string.
    """
    return json.dumps(tasks, separators=(",", ":"), ensure_ascii=False)
