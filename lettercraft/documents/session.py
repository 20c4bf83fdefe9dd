"""
Document Session - version history and recent generations for one letter.

State:
- versions: newest-first list of full-content snapshots (unbounded)
- current_version_index: pointer into versions, -1 when nothing is selected
- history: newest-first list of past generations, capped at HISTORY_LIMIT
- active_content: the HTML currently in the editor

Undo/redo move the index; nothing is diffed. Creating a version always
prepends, so after undoing and saving, the older "redo" snapshots stay in
the list and can only be reached with select_version().

Every mutation writes through to the injected StoragePort. Storage is a
cache: failures are logged and never block the in-memory update.

Usage:
    session = DocumentSession(JsonFileStorage(settings.STORAGE_DIR))
    session.record_generation(result.type, result.length, result.content, title="Cover Letter")
    session.set_content(edited_html)
    session.save_version()
    session.undo()
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from lettercraft.core.config import settings
from lettercraft.documents.storage import (
    CURRENT_INDEX_KEY,
    CURRENT_TEXT_KEY,
    HISTORY_KEY,
    VERSIONS_KEY,
    SafeStorage,
    StoragePort,
)

logger = logging.getLogger("lettercraft.documents.session")


class VersionIndexError(IndexError):
    """Raised when selecting a version index outside the list."""
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# DATA CLASSES
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DocumentVersion:
    """An immutable full-content snapshot."""
    id: str
    name: str
    content: str
    timestamp: str  # ISO-8601
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "timestamp": self.timestamp,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentVersion":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            content=str(data["content"]),
            timestamp=str(data["timestamp"]),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class GeneratedLetter:
    """A read-only record of one successful generation."""
    type: str
    length: str
    content: str
    timestamp: str  # ISO-8601

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "length": self.length,
            "content": self.content,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedLetter":
        return cls(
            type=str(data["type"]),
            length=str(data["length"]),
            content=str(data["content"]),
            timestamp=str(data["timestamp"]),
        )


# ---------------------------------------------------------------------------
# SESSION
# ---------------------------------------------------------------------------

class DocumentSession:
    """
    Linear undo/redo over snapshots plus a bounded generation history.

    Hydrates from storage on construction; each key is read independently.
    """

    def __init__(
        self,
        storage: StoragePort,
        history_limit: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._storage = SafeStorage(storage)
        self._history_limit = history_limit or settings.HISTORY_LIMIT
        self._clock = clock

        self._versions: List[DocumentVersion] = []
        self._history: List[GeneratedLetter] = []
        self._current_index: int = -1
        self._active_content: str = ""

        self._hydrate()

    # -----------------------------------------------------------------------
    # READ-ONLY STATE
    # -----------------------------------------------------------------------

    @property
    def versions(self) -> List[DocumentVersion]:
        return list(self._versions)

    @property
    def history(self) -> List[GeneratedLetter]:
        return list(self._history)

    @property
    def current_version_index(self) -> int:
        return self._current_index

    @property
    def active_content(self) -> str:
        return self._active_content

    @property
    def current_version(self) -> Optional[DocumentVersion]:
        if 0 <= self._current_index < len(self._versions):
            return self._versions[self._current_index]
        return None

    @property
    def has_unsaved_changes(self) -> bool:
        """True iff the active content differs from the selected version."""
        version = self.current_version
        if version is None:
            return False
        return version.content != self._active_content

    @property
    def can_undo(self) -> bool:
        return self._current_index < len(self._versions) - 1

    @property
    def can_redo(self) -> bool:
        return self._current_index > 0

    # -----------------------------------------------------------------------
    # EDITING
    # -----------------------------------------------------------------------

    def set_content(self, content: str) -> None:
        """Replace the active content (an editor change)."""
        self._active_content = content
        self._persist_content()

    def create_version(
        self,
        content: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[DocumentVersion]:
        """
        Prepend a snapshot of content and select it.

        Returns None without changing anything when some existing version
        already has byte-identical content.
        """
        if self._versions and any(v.content == content for v in self._versions):
            logger.debug("Skipping duplicate version")
            return None

        now = self._clock()
        if name is None:
            name = "Initial Version" if not self._versions else f"Version {len(self._versions) + 1}"
        if description is None:
            description = f"Created at {self._time_label(now)}"

        version = DocumentVersion(
            id=f"{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}",
            name=name,
            content=content,
            timestamp=now.isoformat(),
            description=description,
        )
        self._versions.insert(0, version)
        self._current_index = 0
        self._persist_versions()
        self._persist_index()
        return version

    def save_version(self) -> Optional[DocumentVersion]:
        """Snapshot the active content, labelled by whether it was edited."""
        time_label = self._time_label(self._clock())
        if self.has_unsaved_changes:
            name = f"Edited Version ({time_label})"
            description = "Manual edits applied"
        else:
            name = f"Saved Version ({time_label})"
            description = "Current state saved"
        return self.create_version(self._active_content, name, description)

    # -----------------------------------------------------------------------
    # NAVIGATION
    # -----------------------------------------------------------------------

    def undo(self) -> bool:
        """Move to the next older version. Returns False when there is none."""
        if not self.can_undo:
            return False
        self._load_version(self._current_index + 1)
        return True

    def redo(self) -> bool:
        """Move to the next newer version. Returns False when there is none."""
        if not self.can_redo:
            return False
        self._load_version(self._current_index - 1)
        return True

    def select_version(self, index: int) -> DocumentVersion:
        """
        Jump to any version.

        Raises:
            VersionIndexError: index outside 0 <= index < len(versions)
        """
        if not 0 <= index < len(self._versions):
            raise VersionIndexError(
                f"Version index {index} out of range (0..{len(self._versions) - 1})"
            )
        self._load_version(index)
        return self._versions[index]

    # -----------------------------------------------------------------------
    # HISTORY
    # -----------------------------------------------------------------------

    def append_history(self, entry: GeneratedLetter) -> None:
        """Prepend entry and drop anything beyond the history limit."""
        self._history = [entry, *self._history][: self._history_limit]
        self._persist_history()

    def select_history_item(self, entry: GeneratedLetter) -> Optional[DocumentVersion]:
        """
        Load a past generation into the editor.

        A "From History" version is created only when the content differs
        from what was in the editor.
        """
        previous = self._active_content
        self.set_content(entry.content)
        if previous == entry.content:
            return None

        try:
            restored_on = datetime.fromisoformat(entry.timestamp).date().isoformat()
        except ValueError:
            restored_on = entry.timestamp
        return self.create_version(
            entry.content,
            f"From History ({restored_on})",
            "Restored from recent generations",
        )

    def record_generation(
        self,
        letter_type: str,
        length: str,
        content: str,
        title: Optional[str] = None,
    ) -> GeneratedLetter:
        """
        Store a fresh generation: editor content, a version, a history entry.
        """
        self.set_content(content)
        self.create_version(content, title or "Generated Letter", "AI-generated content")

        entry = GeneratedLetter(
            type=letter_type or "custom",
            length=length or "unknown",
            content=content,
            timestamp=self._clock().isoformat(),
        )
        self.append_history(entry)
        return entry

    # -----------------------------------------------------------------------
    # RESET
    # -----------------------------------------------------------------------

    def delete_all(self) -> None:
        """
        Clear the editor and the version chain and purge their keys.

        History is left as it is.
        """
        self._active_content = ""
        self._versions = []
        self._current_index = -1

        self._storage.remove(CURRENT_TEXT_KEY)
        self._storage.remove(VERSIONS_KEY)
        self._storage.remove(CURRENT_INDEX_KEY)
        logger.info("Document versions and content deleted")

    # -----------------------------------------------------------------------
    # PRIVATE METHODS
    # -----------------------------------------------------------------------

    def _load_version(self, index: int) -> None:
        self._current_index = index
        self._active_content = self._versions[index].content
        self._persist_index()
        self._persist_content()

    def _time_label(self, moment: datetime) -> str:
        return moment.astimezone().strftime("%H:%M")

    def _persist_versions(self) -> None:
        if self._versions:
            self._storage.save(VERSIONS_KEY, [v.to_dict() for v in self._versions])

    def _persist_history(self) -> None:
        if self._history:
            self._storage.save(HISTORY_KEY, [h.to_dict() for h in self._history])

    def _persist_content(self) -> None:
        if self._active_content:
            self._storage.save(CURRENT_TEXT_KEY, self._active_content)
        else:
            self._storage.remove(CURRENT_TEXT_KEY)

    def _persist_index(self) -> None:
        if self._current_index >= 0:
            self._storage.save(CURRENT_INDEX_KEY, self._current_index)

    def _hydrate(self) -> None:
        saved_history = self._storage.load(HISTORY_KEY)
        saved_versions = self._storage.load(VERSIONS_KEY)
        saved_text = self._storage.load(CURRENT_TEXT_KEY)
        saved_index = self._storage.load(CURRENT_INDEX_KEY)

        if saved_history:
            try:
                self._history = [GeneratedLetter.from_dict(h) for h in saved_history]
            except (KeyError, TypeError, AttributeError) as e:
                logger.error(f"Error loading {HISTORY_KEY} from storage: {e}")
        if saved_versions:
            try:
                self._versions = [DocumentVersion.from_dict(v) for v in saved_versions]
            except (KeyError, TypeError, AttributeError) as e:
                logger.error(f"Error loading {VERSIONS_KEY} from storage: {e}")
        if isinstance(saved_text, str):
            self._active_content = saved_text

        if isinstance(saved_index, int) and not isinstance(saved_index, bool):
            self._current_index = saved_index
        # Keys are written independently, so repair an index that no
        # longer points into the version list
        if not self._versions:
            self._current_index = -1
        elif not 0 <= self._current_index < len(self._versions):
            self._current_index = 0
