"""Árvore em memória com a semântica do Realtime Database (apenas dev/testes).

⚠️ Não usar em produção!
- Não persiste entre restarts
- Não é compartilhada entre processos
"""

from __future__ import annotations

import copy
import threading
from typing import Any


class InMemoryTree:
    """Referência para um nó de uma árvore de dicts compartilhada.

    Semântica espelhada do banco remoto:
    - get() de nó inexistente retorna None
    - set(None) equivale a delete()
    - nós que ficam vazios desaparecem
    """

    def __init__(
        self,
        _root: dict[str, Any] | None = None,
        _path: tuple[str, ...] = (),
        _lock: threading.Lock | None = None,
    ) -> None:
        self._root = _root if _root is not None else {}
        self._path = _path
        self._lock = _lock or threading.Lock()

    @property
    def key(self) -> str | None:
        return self._path[-1] if self._path else None

    @property
    def path(self) -> str:
        return "/" + "/".join(self._path)

    def child(self, path: str) -> InMemoryTree:
        parts = tuple(p for p in path.split("/") if p)
        if not parts:
            raise ValueError("child path não pode ser vazio")
        return InMemoryTree(self._root, self._path + parts, self._lock)

    def get(self) -> Any:
        with self._lock:
            node: Any = self._root
            for part in self._path:
                if not isinstance(node, dict) or part not in node:
                    return None
                node = node[part]
            if node == {}:
                return None
            return copy.deepcopy(node)

    def set(self, value: Any) -> None:
        if value is None:
            self.delete()
            return
        if not self._path:
            raise ValueError("set na raiz não suportado")
        with self._lock:
            node = self._root
            for part in self._path[:-1]:
                nxt = node.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    node[part] = nxt
                node = nxt
            node[self._path[-1]] = copy.deepcopy(value)

    def delete(self) -> None:
        with self._lock:
            if not self._path:
                self._root.clear()
                return
            trail: list[dict[str, Any]] = [self._root]
            node: Any = self._root
            for part in self._path[:-1]:
                if not isinstance(node, dict) or part not in node:
                    return
                node = node[part]
                trail.append(node)
            if not isinstance(node, dict):
                return
            node.pop(self._path[-1], None)
            # remove pais vazios
            for depth in range(len(trail) - 1, 0, -1):
                if trail[depth]:
                    break
                trail[depth - 1].pop(self._path[depth - 1], None)
