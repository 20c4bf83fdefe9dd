"""
Storage Port - key/value persistence for the document workspace.

The workspace never touches a storage medium directly; it is handed a
StoragePort and calls load/save/remove. Values are JSON-encoded, one
document per key, with no multi-key transactions.

Implementations:
- InMemoryStorage: a dict of JSON strings (tests, throwaway sessions)
- JsonFileStorage: one <key>.json file per key in a directory
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger("lettercraft.documents.storage")


# ---------------------------------------------------------------------------
# STORAGE KEYS
# ---------------------------------------------------------------------------
HISTORY_KEY = "letterHistory"
VERSIONS_KEY = "documentVersions"
CURRENT_TEXT_KEY = "currentGeneratedText"
CURRENT_INDEX_KEY = "currentVersionIndex"
SECTION_CONTENTS_KEY = "advancedSectionContents"
SELECTED_TEMPLATE_KEY = "advancedSelectedTemplate"


class StoragePort(ABC):
    """
    Abstract key/value store.

    Implementations may raise on I/O or serialization problems; callers
    decide whether a failure matters.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """Return the decoded value for key, or None if absent."""
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """JSON-encode value and store it under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key; removing a missing key is not an error."""
        pass


class InMemoryStorage(StoragePort):
    """
    Dict-backed storage.

    Values still go through JSON so a reload sees exactly what a real
    medium would return.
    """

    def __init__(self):
        self._items: Dict[str, str] = {}

    def load(self, key: str) -> Optional[Any]:
        raw = self._items.get(key)
        return json.loads(raw) if raw else None

    def save(self, key: str, value: Any) -> None:
        self._items[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self):
        return set(self._items)

    def raw(self, key: str) -> Optional[str]:
        """Stored JSON text for key (test helper)."""
        return self._items.get(key)


class JsonFileStorage(StoragePort):
    """
    One JSON file per key under a directory.

    Usage:
        storage = JsonFileStorage(settings.STORAGE_DIR)
        session = DocumentSession(storage)
    """

    _SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def load(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        raw = path.read_text(encoding="utf-8")
        return json.loads(raw) if raw else None

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        encoded = json.dumps(value, ensure_ascii=False)
        # Write then rename so a crash never leaves half a document
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(encoded, encoding="utf-8")
        tmp.replace(path)

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass

    def _path(self, key: str) -> Path:
        if not self._SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"


class SafeStorage:
    """
    Wraps a StoragePort so failures are logged and swallowed.

    A full disk or a corrupt document must never abort an in-memory update.
    """

    def __init__(self, storage: StoragePort):
        self._storage = storage

    def load(self, key: str) -> Optional[Any]:
        try:
            return self._storage.load(key)
        except Exception as e:
            logger.error(f"Error loading {key} from storage: {e}")
            return None

    def save(self, key: str, value: Any) -> None:
        try:
            self._storage.save(key, value)
        except Exception as e:
            logger.error(f"Error saving {key} to storage: {e}")

    def remove(self, key: str) -> None:
        try:
            self._storage.remove(key)
        except Exception as e:
            logger.error(f"Error removing {key} from storage: {e}")
