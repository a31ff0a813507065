"""Protocolos estruturais da árvore remota (estilo firebase_admin.db.Reference).

A árvore é um colaborador externo: o store só depende destas capacidades.
Todas as chamadas são bloqueantes; a fronteira assíncrona fica em
firesession.infra.tree.TreeClient.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TreeReference(Protocol):
    """Referência navegável para um nó da árvore."""

    @property
    def key(self) -> str | None: ...

    def child(self, path: str) -> TreeReference: ...

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...

    def delete(self) -> None: ...


@runtime_checkable
class TreeDatabase(Protocol):
    """Handle de banco que expõe a referência raiz (ex.: módulo firebase_admin.db)."""

    def reference(self) -> TreeReference: ...
