"""Contexto de observabilidade (operation_id por operação/varredura)."""

from __future__ import annotations

import contextlib
import uuid
from collections.abc import Generator
from contextvars import ContextVar

_operation_id: ContextVar[str] = ContextVar("operation_id", default="")


def get_operation_id() -> str:
    """Retorna o operation_id corrente (ou vazio)."""

    return _operation_id.get()


@contextlib.contextmanager
def operation_scope(prefix: str, operation_id: str | None = None) -> Generator[str, None, None]:
    """Define um operation_id enquanto o bloco executa.

    Usado pelo reaper para que todos os logs de uma varredura compartilhem
    o mesmo identificador.
    """
    value = operation_id or f"{prefix}-{uuid.uuid4().hex[:12]}"
    token = _operation_id.set(value)
    try:
        yield value
    finally:
        _operation_id.reset(token)
