"""Adapter de árvore sobre Firestore (coleção = coleção de sessões).

Mapeamento:
/{collection}          -> coleção Firestore
/{collection}/{key}    -> documento {key}

Só dois níveis são suportados; é o que o session store usa.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firesession.observability.logging import get_logger

if TYPE_CHECKING:
    from google.cloud import firestore

logger = get_logger(__name__)

# Limite de operações por WriteBatch no Firestore
_BATCH_LIMIT = 500


class FirestoreTree:
    """Referência de árvore apoiada em um firestore.Client."""

    def __init__(self, client: firestore.Client, _path: tuple[str, ...] = ()) -> None:
        self._client = client
        self._path = _path

    @property
    def key(self) -> str | None:
        return self._path[-1] if self._path else None

    def child(self, path: str) -> FirestoreTree:
        parts = tuple(p for p in path.split("/") if p)
        if not parts:
            raise ValueError("child path não pode ser vazio")
        full = self._path + parts
        if len(full) > 2:
            raise ValueError("FirestoreTree suporta apenas coleção/documento")
        return FirestoreTree(self._client, full)

    def _collection(self) -> firestore.CollectionReference:
        return self._client.collection(self._path[0])

    def _document(self) -> firestore.DocumentReference:
        return self._collection().document(self._path[1])

    def get(self) -> Any:
        if len(self._path) == 1:
            children = {doc.id: doc.to_dict() for doc in self._collection().stream()}
            return children or None
        if len(self._path) == 2:
            doc = self._document().get()
            if not doc.exists:
                return None
            return doc.to_dict()
        raise ValueError("get na raiz não suportado")

    def set(self, value: Any) -> None:
        if len(self._path) != 2:
            raise ValueError("set só é suportado em documentos")
        if value is None:
            self.delete()
            return
        self._document().set(dict(value))

    def delete(self) -> None:
        if len(self._path) == 2:
            self._document().delete()
            return
        if len(self._path) == 1:
            self._delete_collection()
            return
        raise ValueError("delete na raiz não suportado")

    def _delete_collection(self) -> None:
        """Remove todos os documentos da coleção em lotes."""
        deleted = 0
        while True:
            docs = list(self._collection().limit(_BATCH_LIMIT).stream())
            if not docs:
                break
            batch = self._client.batch()
            for doc in docs:
                batch.delete(doc.reference)
            batch.commit()
            deleted += len(docs)
            if len(docs) < _BATCH_LIMIT:
                break
        logger.debug(
            "firestore_collection_cleared",
            extra={"collection": self._path[0], "deleted": deleted},
        )
