"""Relógio injetável (tempo em milissegundos desde epoch)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Fonte de 'agora' usada para calcular e verificar expiração."""

    def now_ms(self) -> int: ...


class SystemClock:
    """Relógio real (UTC)."""

    def now_ms(self) -> int:
        return int(datetime.now(tz=UTC).timestamp() * 1000)
