"""Configurações do session store via variáveis de ambiente.

Todas as configurações são carregadas de env vars com prefixo FIRESESSION_.
Nunca hardcode credenciais ou URLs de banco.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from firesession.domain.records import DEFAULT_REAP_INTERVAL_SECONDS, DEFAULT_TTL_MS

# -----------------------------------------------------------------------------
# Defaults do store (compatíveis com registros gravados pelo connect-session)
# -----------------------------------------------------------------------------
DEFAULT_SESSIONS_COLLECTION: str = "sessions"
DEFAULT_TTL_SECONDS: int = DEFAULT_TTL_MS // 1000  # um dia


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="FIRESESSION_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "firesession"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text

    # Firebase Realtime Database
    database_url: str | None = None  # https://<projeto>.firebaseio.com
    credentials_path: str | None = None  # JSON de service account (ADC se ausente)
    auth_uid: str | None = None  # databaseAuthVariableOverride {"uid": ...}
    app_name: str | None = None  # Nome do firebase_admin.App (default app se ausente)

    # Sessões
    sessions_collection: str = DEFAULT_SESSIONS_COLLECTION
    default_ttl_seconds: int = DEFAULT_TTL_SECONDS
    reap_interval_seconds: float = DEFAULT_REAP_INTERVAL_SECONDS  # <= 0 desabilita

    @property
    def default_ttl_ms(self) -> int:
        """TTL padrão em milissegundos (unidade do campo expires)."""
        return self.default_ttl_seconds * 1000

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    def validate_store_config(self) -> list[str]:
        """Valida configuração do session store.

        Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []
        if not self.database_url:
            errors.append("FIRESESSION_DATABASE_URL não configurado")
        elif not self.database_url.startswith("https://"):
            errors.append("FIRESESSION_DATABASE_URL deve usar https://")

        if not self.sessions_collection.strip():
            errors.append("FIRESESSION_SESSIONS_COLLECTION não pode ser vazio")

        if self.default_ttl_seconds <= 0:
            errors.append("FIRESESSION_DEFAULT_TTL_SECONDS deve ser > 0")

        # Em produção o reaper é a única limpeza para sessões nunca relidas
        if self.is_production and self.reap_interval_seconds <= 0:
            errors.append("FIRESESSION_REAP_INTERVAL_SECONDS <= 0 é proibido em produção")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Retorna instância única (cacheada) de Settings."""
    return Settings()
