"""Factory do session store a partir de Settings.

Inicializa (ou reaproveita) o firebase_admin.App e entrega ao store a
referência raiz do Realtime Database.
"""

from __future__ import annotations

from typing import Any

import firebase_admin
from firebase_admin import credentials, db

from firesession.config.settings import Settings, get_settings
from firesession.domain.clock import Clock
from firesession.domain.protocols.session_store import Callback
from firesession.infra.errors import ConfigurationError
from firesession.infra.session_store import FirebaseSessionStore
from firesession.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)

_DEFAULT_APP_NAME = "[DEFAULT]"


def _build_options(settings: Settings) -> dict[str, Any]:
    options: dict[str, Any] = {"databaseURL": settings.database_url}
    if settings.auth_uid:
        options["databaseAuthVariableOverride"] = {"uid": settings.auth_uid}
    return options


def initialize_firebase_app(settings: Settings) -> firebase_admin.App:
    """Retorna o App existente com o nome configurado ou cria um novo.

    Raises:
        ConfigurationError: se a configuração for inválida ou o SDK recusar
    """
    errors = settings.validate_store_config()
    if errors:
        logger.error("session_store_config_invalid", extra={"errors": errors})
        raise ConfigurationError("; ".join(errors))

    app_name = settings.app_name or _DEFAULT_APP_NAME
    try:
        return firebase_admin.get_app(app_name)
    except ValueError:
        pass

    try:
        if settings.credentials_path:
            cred = credentials.Certificate(settings.credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        app = firebase_admin.initialize_app(cred, _build_options(settings), name=app_name)
    except (ValueError, OSError) as exc:
        logger.error("firebase_app_init_failed", extra={"error": type(exc).__name__})
        raise ConfigurationError(f"Falha ao inicializar firebase_admin: {exc}") from exc

    logger.info(
        "firebase_app_initialized",
        extra={"app_name": app_name, "auth_override": bool(settings.auth_uid)},
    )
    return app


def create_session_store(
    settings: Settings | None = None,
    *,
    database: object | None = None,
    reap_callback: Callback | None = None,
    clock: Clock | None = None,
    configure_logs: bool = False,
) -> FirebaseSessionStore:
    """Cria o FirebaseSessionStore conforme Settings.

    Args:
        settings: Settings (default: get_settings())
        database: referência/handle pronto; se ausente, usa firebase_admin
        reap_callback: callback de conclusão das varreduras agendadas
        clock: relógio injetável (testes)
        configure_logs: aplica configure_logging(level, service_name)
    """
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.log_level, settings.service_name, settings.log_format)

    if database is None:
        app = initialize_firebase_app(settings)
        database = db.reference("/", app=app)

    store = FirebaseSessionStore(
        database,
        sessions=settings.sessions_collection,
        reap_interval=settings.reap_interval_seconds,
        reap_callback=reap_callback,
        clock=clock,
        default_ttl_ms=settings.default_ttl_ms,
    )
    logger.info(
        "session_store_created",
        extra={
            "collection": store.sessions_collection,
            "reap_interval_seconds": settings.reap_interval_seconds,
        },
    )
    return store
