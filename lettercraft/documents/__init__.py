"""
Documents Module - client-side letter state: versions, history, sections.

Persistence goes through an injected StoragePort, never ambient state.
"""

from lettercraft.documents.session import (
    DocumentSession,
    DocumentVersion,
    GeneratedLetter,
    VersionIndexError,
)
from lettercraft.documents.storage import (
    InMemoryStorage,
    JsonFileStorage,
    StoragePort,
)

__all__ = [
    "DocumentSession",
    "DocumentVersion",
    "GeneratedLetter",
    "VersionIndexError",
    "InMemoryStorage",
    "JsonFileStorage",
    "StoragePort",
]
