"""firesession: session store expirável sobre o Firebase Realtime Database."""

from firesession.domain.records import ReapResult, SessionRecord
from firesession.infra import (
    ConfigurationError,
    FirebaseSessionStore,
    InMemoryTree,
    SerializationError,
    SessionStoreError,
    TransportError,
    create_session_store,
    sanitize_key,
)

__version__ = "0.1.0"

__all__ = [
    "FirebaseSessionStore",
    "create_session_store",
    "InMemoryTree",
    "ReapResult",
    "SessionRecord",
    "sanitize_key",
    "SessionStoreError",
    "ConfigurationError",
    "TransportError",
    "SerializationError",
]
