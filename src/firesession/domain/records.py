"""Modelos do registro de sessão persistido.

Um SessionRecord por chave sanitizada na coleção de sessões:
- expires: timestamp absoluto (ms desde epoch) de expiração
- sess: payload da sessão serializado em JSON
- type: marcador fixo identificando registros deste store
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

RECORD_TYPE: str = "connect-session"
ONE_DAY_MS: int = 86_400_000
DEFAULT_TTL_MS: int = ONE_DAY_MS
DEFAULT_REAP_INTERVAL_SECONDS: float = ONE_DAY_MS / 4 / 1000


class SessionRecord(BaseModel):
    """Registro armazenado na árvore remota.

    `expires` ausente significa registro sem expiração conhecida
    (nunca expira por leitura, nunca é removido pelo reaper).
    """

    model_config = ConfigDict(frozen=True)

    expires: int | None = None
    sess: dict[str, Any]
    type: str = RECORD_TYPE

    def is_expired(self, now: int) -> bool:
        """Expirado quando now >= expires (expiração preguiçosa)."""
        return self.expires is not None and now >= self.expires


@dataclass(slots=True)
class ReapResult:
    """Resultado agregado de uma varredura do reaper."""

    removed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def total(self) -> int:
        return len(self.removed) + len(self.failed)
