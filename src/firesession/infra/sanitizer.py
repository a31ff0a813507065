"""Sanitização de chaves para a sintaxe de paths da árvore remota.

O Realtime Database não aceita '.', '$', '#', '[', ']' nem '/' em chaves.
Cada caractere proibido vira '_' (determinístico e idempotente).
"""

from __future__ import annotations

import re
from re import Pattern

_FORBIDDEN: Pattern[str] = re.compile(r"[.$#\[\]/]")


def sanitize_key(raw_key: str) -> str:
    """Mapeia um identificador arbitrário para uma chave válida.

    Exemplos:
        >>> sanitize_key("1234_#$[]")
        '1234_____'

        >>> sanitize_key("a/b.c")
        'a_b_c'
    """
    return _FORBIDDEN.sub("_", raw_key)
