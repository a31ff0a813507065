"""Camada de infraestrutura: adapters do session store.

Este módulo exporta:

- Store: FirebaseSessionStore, create_session_store
- Árvore remota: TreeClient, Snapshot, InMemoryTree, FirestoreTree
- Componentes: sanitize_key, encode_record/decode_record, Reaper
- Erros: SessionStoreError, ConfigurationError, TransportError, SerializationError

Uso típico:
    from firesession.infra import create_session_store
"""

from firesession.infra.codec import compute_expires, decode_record, encode_record
from firesession.infra.errors import (
    ConfigurationError,
    SerializationError,
    SessionStoreError,
    TransportError,
)
from firesession.infra.factory import create_session_store, initialize_firebase_app
from firesession.infra.reaper import Reaper
from firesession.infra.sanitizer import sanitize_key
from firesession.infra.session_store import FirebaseSessionStore
from firesession.infra.tree import Snapshot, TreeClient, resolve_root
from firesession.infra.tree_firestore import FirestoreTree
from firesession.infra.tree_memory import InMemoryTree

__all__ = [
    # Store
    "FirebaseSessionStore",
    "create_session_store",
    "initialize_firebase_app",
    "Reaper",
    # Árvore remota
    "TreeClient",
    "Snapshot",
    "resolve_root",
    "InMemoryTree",
    "FirestoreTree",
    # Componentes
    "sanitize_key",
    "compute_expires",
    "encode_record",
    "decode_record",
    # Erros
    "SessionStoreError",
    "ConfigurationError",
    "TransportError",
    "SerializationError",
]
