"""Instrumentação de latência por componente."""

from __future__ import annotations

import contextlib
import time
from collections.abc import Generator
from typing import Any

from firesession.observability.logging import get_logger

logger = get_logger(__name__)


@contextlib.contextmanager
def timed(component: str, **fields: Any) -> Generator[dict[str, Any], None, None]:
    """Mede o bloco e loga `component_latency` ao sair.

    O dict entregue ao bloco pode receber campos extras (ex.: contagens)
    que entram no mesmo log. `outcome` vale "error" se o bloco levantar.

    Uso:
        with timed("reap", collection="sessions") as stats:
            stats["removed"] = 3
    """
    extra: dict[str, Any] = {"component": component, **fields}
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield extra
    except BaseException:
        outcome = "error"
        raise
    finally:
        extra["elapsed_ms"] = round((time.perf_counter() - start) * 1000, 2)
        extra["outcome"] = outcome
        logger.info("component_latency", extra=extra)
