"""Reaper: varredura periódica que remove sessões expiradas.

Cada execução é independente (snapshot -> filtro -> deletes em lote); não há
estado carregado entre execuções nem exclusão mútua entre varreduras. O
handle permite parar a task no shutdown do processo.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

import anyio

from firesession.domain.protocols.session_store import Callback
from firesession.domain.records import ReapResult
from firesession.observability.logging import get_logger

logger = get_logger(__name__)

Sweep = Callable[..., Awaitable[Any]]


def log_reap_result(error: Exception | None, result: ReapResult | None) -> None:
    """Callback padrão de conclusão da varredura agendada."""
    if error is not None:
        logger.error("scheduled_reap_failed", extra={"error": type(error).__name__})
        return
    if result is None:
        logger.debug("scheduled_reap_noop")
        return
    logger.info(
        "scheduled_reap_completed",
        extra={"removed": len(result.removed), "failed": len(result.failed)},
    )


class Reaper:
    """Task recorrente que chama `sweep(callback=...)` a cada `interval` segundos."""

    def __init__(
        self,
        sweep: Sweep,
        interval: float,
        callback: Callback | None = None,
    ) -> None:
        self._sweep = sweep
        self._interval = interval
        self._callback = callback or log_reap_result
        self._task: asyncio.Task[None] | None = None
        self._started = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def enabled(self) -> bool:
        return self._interval > 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> Reaper:
        """Agenda a varredura recorrente no event loop corrente.

        Raises:
            RuntimeError: se não houver event loop em execução
        """
        if not self.enabled or self.running:
            return self
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name="firesession-reaper")
        self._started = True
        logger.info("reaper_started", extra={"interval_seconds": self._interval})
        return self

    def ensure_started(self) -> None:
        """Inicia uma única vez, se houver loop ativo (no-op caso contrário)."""
        if self._started or not self.enabled:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self.start()

    async def stop(self) -> None:
        """Cancela a task e aguarda o término."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("reaper_stopped")

    async def _run(self) -> None:
        while True:
            await anyio.sleep(self._interval)
            try:
                await self._sweep(callback=self._callback)
            except Exception as exc:  # noqa: BLE001
                # Mantém o agendamento vivo; a próxima varredura tenta de novo
                logger.error("reaper_iteration_failed", extra={"error": type(exc).__name__})
