"""Re-exports dos Protocolos de domínio."""

from __future__ import annotations

from firesession.domain.protocols.session_store import AsyncSessionStoreProtocol, Callback
from firesession.domain.protocols.tree import TreeDatabase, TreeReference

__all__ = [
    "AsyncSessionStoreProtocol",
    "Callback",
    "TreeDatabase",
    "TreeReference",
]
