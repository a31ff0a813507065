"""Erros do session store.

Taxonomia:
- ConfigurationError: handle de banco ausente/inválido (síncrono, na construção)
- TransportError: falha reportada pelo cliente da árvore remota
- SerializationError: registro armazenado não é JSON válido / formato inesperado
"""

from __future__ import annotations


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão."""

    pass


class ConfigurationError(SessionStoreError):
    """Configuração inválida do store (ex.: database ausente)."""


class TransportError(SessionStoreError):
    """Falha de leitura/escrita/remoção na árvore remota."""


class SerializationError(SessionStoreError):
    """Payload de sessão armazenado não pôde ser (de)serializado."""
