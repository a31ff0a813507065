"""Observabilidade: logging JSON, operation_id e latência."""

from firesession.observability.context import get_operation_id, operation_scope
from firesession.observability.logging import configure_logging, get_logger, mask_sid
from firesession.observability.timing import timed

__all__ = [
    "configure_logging",
    "get_logger",
    "get_operation_id",
    "mask_sid",
    "operation_scope",
    "timed",
]
