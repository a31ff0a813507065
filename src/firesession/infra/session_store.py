"""Session store sobre o Firebase Realtime Database.

Coleção padrão: /sessions/{sid sanitizado}
Registro: {expires (ms), type: "connect-session", sess: JSON do payload}

Expiração aplicada em dois caminhos:
- preguiçosa: get() remove o registro expirado e responde "sem sessão"
- proativa: reap() remove todos os registros expirados (Reaper agendado)

Sem locks nem transações: last write wins na árvore remota. touch() é
leitura-seguida-de-escrita e não é atômico.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from firesession.config.settings import DEFAULT_SESSIONS_COLLECTION
from firesession.domain.clock import Clock, SystemClock
from firesession.domain.protocols.session_store import AsyncSessionStoreProtocol, Callback
from firesession.domain.protocols.tree import TreeReference
from firesession.domain.records import (
    DEFAULT_REAP_INTERVAL_SECONDS,
    DEFAULT_TTL_MS,
    ReapResult,
)
from firesession.infra.codec import compute_expires, decode_record, encode_record, read_expires
from firesession.infra.errors import SerializationError, SessionStoreError
from firesession.infra.reaper import Reaper
from firesession.infra.sanitizer import sanitize_key
from firesession.infra.tree import TreeClient, resolve_root
from firesession.observability.context import operation_scope
from firesession.observability.logging import get_logger, mask_sid
from firesession.observability.timing import timed

logger = get_logger(__name__)

T = TypeVar("T")


class FirebaseSessionStore(AsyncSessionStoreProtocol):
    """Store plugável (get/set/destroy/touch/clear/reap) para middlewares de sessão.

    Toda operação é uma coroutine e aceita `callback(error, result)` opcional:
    - sem callback: falhas levantam SessionStoreError (canal de erro do await)
    - com callback: o erro vai para o callback e a coroutine retorna None
    """

    def __init__(
        self,
        database: object,
        *,
        sessions: str | None = DEFAULT_SESSIONS_COLLECTION,
        reap_interval: float | None = None,
        reap_callback: Callback | None = None,
        clean_sid: Callable[[str], str] | None = None,
        clock: Clock | None = None,
        default_ttl_ms: int = DEFAULT_TTL_MS,
        tree_client: TreeClient | None = None,
    ) -> None:
        self._root = resolve_root(database)
        self._sessions_name = sanitize_key(sessions) if sessions else DEFAULT_SESSIONS_COLLECTION
        self._sessions_ref = self._root.child(self._sessions_name)
        self._clean_sid = clean_sid or sanitize_key
        self._clock = clock or SystemClock()
        self._default_ttl_ms = default_ttl_ms
        self._tree = tree_client or TreeClient()

        interval = DEFAULT_REAP_INTERVAL_SECONDS if reap_interval is None else reap_interval
        self._reaper = Reaper(self.reap, interval, reap_callback)
        self._reaper.ensure_started()

    @property
    def sessions_collection(self) -> str:
        return self._sessions_name

    @property
    def reaper(self) -> Reaper:
        return self._reaper

    def _ref(self, sid: str) -> TreeReference:
        return self._sessions_ref.child(self._clean_sid(sid))

    async def _complete(
        self, op: str, pending: Awaitable[T], callback: Callback | None
    ) -> T | None:
        """Entrega resultado/erro pelo callback (se houver) ou pelo await."""
        self._reaper.ensure_started()
        try:
            result = await pending
        except SessionStoreError as exc:
            logger.debug("store_operation_failed", extra={"op": op, "error": type(exc).__name__})
            if callback is None:
                raise
            callback(exc, None)
            return None
        if callback is not None:
            callback(None, result)
        return result

    # ------------------------------------------------------------------ get

    async def get(self, sid: str, callback: Callback | None = None) -> dict[str, Any] | None:
        """Busca a sessão; ausente ou expirada -> None (sem erro)."""
        return await self._complete("get", self._get(sid), callback)

    async def _get(self, sid: str) -> dict[str, Any] | None:
        now = self._clock.now_ms()
        ref = self._ref(sid)
        snapshot = await self._tree.read(ref)
        if not snapshot.exists:
            logger.debug("session_not_found", extra={"session_id": mask_sid(ref.key)})
            return None

        expires = read_expires(snapshot.value)
        if expires is not None and now >= expires:
            logger.debug("session_expired", extra={"session_id": mask_sid(ref.key)})
            await self._destroy(sid)
            return None

        record = decode_record(snapshot.value)
        logger.debug("session_loaded", extra={"session_id": mask_sid(ref.key)})
        return record.sess

    # ------------------------------------------------------------------ set

    async def set(
        self, sid: str, sess: dict[str, Any], callback: Callback | None = None
    ) -> None:
        """Grava o registro completo (sobrescreve; sem merge)."""
        await self._complete("set", self._set(sid, sess), callback)

    async def _set(self, sid: str, sess: Mapping[str, Any]) -> None:
        ref = self._ref(sid)
        expires = compute_expires(sess, self._clock.now_ms(), self._default_ttl_ms)
        await self._tree.write(ref, encode_record(sess, expires))
        logger.debug(
            "session_saved",
            extra={"session_id": mask_sid(ref.key), "expires": expires},
        )

    # -------------------------------------------------------------- destroy

    async def destroy(self, sid: str, callback: Callback | None = None) -> None:
        """Remove a sessão (e tudo abaixo da chave)."""
        await self._complete("destroy", self._destroy(sid), callback)

    async def _destroy(self, sid: str) -> None:
        ref = self._ref(sid)
        await self._tree.delete(ref)
        logger.debug("session_destroyed", extra={"session_id": mask_sid(ref.key)})

    # ---------------------------------------------------------------- touch

    async def touch(
        self, sid: str, sess: dict[str, Any], callback: Callback | None = None
    ) -> None:
        """Renova a expiração usando o cookie recebido.

        Mantém todos os campos do payload armazenado, exceto `cookie`, que é
        substituído pelo cookie de `sess`. Sessão ausente ou expirada: no-op.
        """
        await self._complete("touch", self._touch(sid, sess), callback)

    async def _touch(self, sid: str, sess: Mapping[str, Any]) -> None:
        now = self._clock.now_ms()
        ref = self._ref(sid)
        snapshot = await self._tree.read(ref)
        if not snapshot.exists:
            logger.debug("touch_session_not_found", extra={"session_id": mask_sid(ref.key)})
            return

        expires = read_expires(snapshot.value)
        if expires is not None and now >= expires:
            logger.debug("touch_session_expired", extra={"session_id": mask_sid(ref.key)})
            return

        record = decode_record(snapshot.value)
        merged = dict(record.sess)
        if "cookie" in sess:
            merged["cookie"] = sess["cookie"]
        else:
            merged.pop("cookie", None)
        await self._set(sid, merged)

    # ---------------------------------------------------------------- clear

    async def clear(self, callback: Callback | None = None) -> None:
        """Remove a coleção de sessões inteira em uma operação."""
        await self._complete("clear", self._clear(), callback)

    async def _clear(self) -> None:
        await self._tree.delete(self._sessions_ref)
        logger.info("sessions_cleared", extra={"collection": self._sessions_name})

    # ----------------------------------------------------------------- reap

    async def reap(self, callback: Callback | None = None) -> ReapResult | None:
        """Remove todos os registros com expires < agora (início da varredura).

        Retorna None quando não há nada expirado. Falhas individuais de delete
        são agregadas em ReapResult.failed sem falhar a varredura.
        """
        return await self._complete("reap", self._reap(), callback)

    async def _reap(self) -> ReapResult | None:
        with operation_scope("reap"), timed("reap", collection=self._sessions_name) as stats:
            now = self._clock.now_ms()
            snapshot = await self._tree.read(self._sessions_ref)

            scanned = 0
            expired: list[str] = []
            for key, value in snapshot.each_child():
                scanned += 1
                expires = read_expires(value)
                if expires is not None and expires < now:
                    expired.append(key)

            stats["scanned"] = scanned
            stats["expired"] = len(expired)
            if not expired:
                logger.debug("reap_noop", extra={"collection": self._sessions_name})
                return None

            outcomes = await asyncio.gather(
                *(self._tree.delete(self._sessions_ref.child(key)) for key in expired),
                return_exceptions=True,
            )

            result = ReapResult()
            for key, outcome in zip(expired, outcomes, strict=True):
                if isinstance(outcome, Exception):
                    result.failed[key] = type(outcome).__name__
                elif isinstance(outcome, BaseException):
                    raise outcome
                else:
                    result.removed.append(key)

            stats["removed"] = len(result.removed)
            stats["failed"] = len(result.failed)
            if result.failed:
                logger.warning(
                    "reap_partial_failure",
                    extra={"failed": [mask_sid(key) for key in result.failed]},
                )
            logger.info(
                "reap_completed",
                extra={"removed": len(result.removed), "failed": len(result.failed)},
            )
            return result

    # -------------------------------------------------------------- extras

    async def length(self, callback: Callback | None = None) -> int | None:
        """Conta as sessões não expiradas."""
        return await self._complete("length", self._length(), callback)

    async def _length(self) -> int:
        return len(await self._all())

    async def all(self, callback: Callback | None = None) -> dict[str, dict[str, Any]] | None:
        """Lista as sessões não expiradas por chave sanitizada (ilegíveis ficam de fora)."""
        return await self._complete("all", self._all(), callback)

    async def _all(self) -> dict[str, dict[str, Any]]:
        now = self._clock.now_ms()
        snapshot = await self._tree.read(self._sessions_ref)
        sessions: dict[str, dict[str, Any]] = {}
        for key, value in snapshot.each_child():
            try:
                record = decode_record(value)
            except SerializationError:
                logger.warning("session_undecodable", extra={"session_id": mask_sid(key)})
                continue
            if not record.is_expired(now):
                sessions[key] = record.sess
        return sessions

    # ------------------------------------------------------------ lifecycle

    async def close(self) -> None:
        """Para o reaper (shutdown limpo do processo)."""
        await self._reaper.stop()

    async def __aenter__(self) -> FirebaseSessionStore:
        self._reaper.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
