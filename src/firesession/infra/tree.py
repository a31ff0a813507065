"""Fronteira assíncrona sobre a árvore remota (Realtime Database).

O cliente oficial (firebase_admin.db.Reference) é bloqueante; cada chamada
roda em worker thread via anyio para não bloquear o event loop.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

import anyio

from firesession.domain.protocols.tree import TreeDatabase, TreeReference
from firesession.infra.errors import ConfigurationError, TransportError
from firesession.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class Snapshot:
    """Valor lido de uma referência (imutável após a leitura)."""

    key: str | None
    value: Any

    @property
    def exists(self) -> bool:
        return self.value is not None

    def each_child(self) -> Iterator[tuple[str, Any]]:
        """Enumera filhos imediatos como (chave, valor)."""
        if isinstance(self.value, Mapping):
            yield from self.value.items()
        elif isinstance(self.value, list):
            # A árvore devolve listas quando as chaves são inteiros sequenciais
            for index, item in enumerate(self.value):
                if item is not None:
                    yield str(index), item


def _has_callable(obj: object, name: str) -> bool:
    return callable(getattr(obj, name, None))


def resolve_root(database: object) -> TreeReference:
    """Resolve a referência raiz a partir do handle recebido.

    Aceita:
    - uma referência pronta (expõe `child`)
    - um handle de banco (expõe `reference`, ex.: módulo firebase_admin.db)

    Raises:
        ConfigurationError: para qualquer outra coisa (None, "", {}, ...)
    """
    if database is None or isinstance(database, (str, bytes, Mapping, list, tuple)):
        raise ConfigurationError("database deve ser uma referência ou handle de banco")

    if _has_callable(database, "child"):
        return database  # type: ignore[return-value]

    if isinstance(database, TreeDatabase):
        try:
            root = database.reference()  # type: ignore[attr-defined]
        except Exception as exc:
            raise ConfigurationError(
                f"Não foi possível obter a referência raiz: {type(exc).__name__}"
            ) from exc
        if not _has_callable(root, "child"):
            raise ConfigurationError("reference() não retornou uma referência navegável")
        return root

    raise ConfigurationError(
        f"database inválido: {type(database).__name__} não expõe child() nem reference()"
    )


class TreeClient:
    """Operações assíncronas sobre referências da árvore.

    Toda exceção do cliente remoto é registrada e convertida em TransportError.
    """

    async def read(self, ref: TreeReference) -> Snapshot:
        value = await self._call("read", ref, ref.get)
        return Snapshot(key=ref.key, value=value)

    async def write(self, ref: TreeReference, value: Mapping[str, Any]) -> None:
        await self._call("write", ref, ref.set, value)

    async def delete(self, ref: TreeReference) -> None:
        await self._call("delete", ref, ref.delete)

    async def _call(self, op: str, ref: TreeReference, func: Any, *args: Any) -> Any:
        try:
            return await anyio.to_thread.run_sync(func, *args)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "tree_operation_failed",
                extra={"op": op, "ref_key": ref.key, "error": type(exc).__name__},
            )
            raise TransportError(f"Tree {op} failed: {exc}") from exc
