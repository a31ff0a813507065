"""Configurações centralizadas do firesession.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- Defaults do store (coleção, TTL, intervalo do reaper)
"""

from firesession.config.settings import (
    DEFAULT_REAP_INTERVAL_SECONDS,
    DEFAULT_SESSIONS_COLLECTION,
    DEFAULT_TTL_SECONDS,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_REAP_INTERVAL_SECONDS",
    "DEFAULT_SESSIONS_COLLECTION",
    "DEFAULT_TTL_SECONDS",
]
