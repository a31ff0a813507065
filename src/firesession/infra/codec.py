"""Codec do registro de sessão (payload + expires + marcador de tipo)."""

from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from firesession.domain.records import RECORD_TYPE, SessionRecord
from firesession.infra.errors import SerializationError


def _max_age(sess: Mapping[str, Any]) -> float | None:
    cookie = sess.get("cookie")
    if not isinstance(cookie, Mapping):
        return None
    max_age = cookie.get("maxAge")
    # bool é subclasse de int, mas não é um maxAge válido
    if isinstance(max_age, bool) or not isinstance(max_age, numbers.Real):
        return None
    # inf/nan não viram timestamp; cai no TTL padrão
    if not math.isfinite(max_age):
        return None
    return max_age


def compute_expires(sess: Mapping[str, Any], now: int, default_ttl_ms: int) -> int:
    """Calcula o timestamp absoluto de expiração no momento da escrita.

    Usa `sess["cookie"]["maxAge"]` quando numérico; caso contrário o TTL padrão.
    """
    max_age = _max_age(sess)
    if max_age is None:
        return now + default_ttl_ms
    return int(now + max_age)


def encode_record(sess: Mapping[str, Any], expires: int) -> dict[str, Any]:
    """Monta o valor gravado na árvore: {expires, type, sess(JSON)}."""
    try:
        payload = json.dumps(sess, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError("invalid_session_payload") from exc

    return {
        "expires": expires,
        "type": RECORD_TYPE,
        "sess": payload,
    }


def _parse_expires(raw: Any) -> int | None:
    """Normaliza expires (int, float ou string numérica legada)."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise SerializationError("invalid_expires")
    if isinstance(raw, numbers.Integral):
        return int(raw)
    if isinstance(raw, numbers.Real):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw)
        except (ValueError, OverflowError) as exc:
            raise SerializationError("invalid_expires") from exc
    else:
        raise SerializationError("invalid_expires")
    # "Infinity" e "NaN" são strings numéricas válidas para float()
    if not math.isfinite(value):
        raise SerializationError("invalid_expires")
    return int(value)


def decode_record(value: Any) -> SessionRecord:
    """Converte o valor lido da árvore em SessionRecord.

    Raises:
        SerializationError: se o valor não tiver o formato esperado
    """
    if not isinstance(value, Mapping):
        raise SerializationError("record_not_an_object")

    raw_sess = value.get("sess")
    if isinstance(raw_sess, (bytes, bytearray)):
        raw_sess = raw_sess.decode("utf-8")
    if not isinstance(raw_sess, str):
        raise SerializationError("missing_session_payload")

    try:
        sess = json.loads(raw_sess)
    except ValueError as exc:
        raise SerializationError("malformed_session_json") from exc

    try:
        return SessionRecord(
            expires=_parse_expires(value.get("expires")),
            sess=sess,
            type=value.get("type") or RECORD_TYPE,
        )
    except ValidationError as exc:
        raise SerializationError("invalid_session_record") from exc


def read_expires(value: Any) -> int | None:
    """Extrai só o expires de um filho (usado pelo reaper, sem decodificar sess).

    Valores ilegíveis retornam None: o reaper nunca remove o que não entende.
    """
    if not isinstance(value, Mapping):
        return None
    try:
        return _parse_expires(value.get("expires"))
    except SerializationError:
        return None
