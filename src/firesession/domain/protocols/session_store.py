"""Protocolo de domínio para session stores assíncronos."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from firesession.domain.records import ReapResult

# callback(error, result): estilo de conclusão esperado por middlewares de sessão
Callback = Callable[[Exception | None, Any], None]


class AsyncSessionStoreProtocol(ABC):
    """Contrato de store plugável usado pelo middleware de sessão."""

    @abstractmethod
    async def get(self, sid: str, callback: Callback | None = None) -> dict[str, Any] | None: ...

    @abstractmethod
    async def set(
        self, sid: str, sess: dict[str, Any], callback: Callback | None = None
    ) -> None: ...

    @abstractmethod
    async def destroy(self, sid: str, callback: Callback | None = None) -> None: ...

    @abstractmethod
    async def touch(
        self, sid: str, sess: dict[str, Any], callback: Callback | None = None
    ) -> None: ...

    @abstractmethod
    async def clear(self, callback: Callback | None = None) -> None: ...

    @abstractmethod
    async def reap(self, callback: Callback | None = None) -> ReapResult | None: ...
