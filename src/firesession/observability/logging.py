"""Configuração de logging estruturado (JSON por padrão)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from firesession.observability.context import get_operation_id

_JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s %(operation_id)s %(service)s"
_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(service)s %(operation_id)s] %(name)s: %(message)s"


class OperationIdFilter(logging.Filter):
    """Injeta operation_id e service em cada record.

    Nunca logar payloads de sessão; ids vão truncados (ver mask_sid).
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "operation_id", None):
            record.operation_id = get_operation_id()
        record.service = self._service_name
        return True


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "text":
        return logging.Formatter(_TEXT_FORMAT)
    return JsonFormatter(_JSON_FIELDS, rename_fields={"levelname": "level", "name": "logger"})


def configure_logging(level: str, service_name: str, fmt: str = "json") -> None:
    """Instala um único handler no root logger.

    Args:
        level: nível (ex.: "INFO")
        service_name: valor do campo `service`
        fmt: "json" (produção) ou "text" (desenvolvimento local)
    """
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(_build_formatter(fmt.lower()))
    handler.addFilter(OperationIdFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def mask_sid(sid: str | None) -> str:
    """Trunca o session id para logs."""
    return (sid or "")[:8] + "..."
