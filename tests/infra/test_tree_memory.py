"""Testes para InMemoryTree (semântica do Realtime Database)."""

from __future__ import annotations

import pytest

from firesession.infra.tree_memory import InMemoryTree


class TestInMemoryTree:
    """Testes de navegação, leitura e escrita."""

    def test_missing_node_is_none(self):
        assert InMemoryTree().child("sessions/x").get() is None

    def test_set_and_get(self):
        root = InMemoryTree()
        root.child("sessions").child("a").set({"v": 1})
        assert root.child("sessions/a").get() == {"v": 1}
        assert root.child("sessions").get() == {"a": {"v": 1}}

    def test_key_and_path(self):
        ref = InMemoryTree().child("sessions/abc")
        assert ref.key == "abc"
        assert ref.path == "/sessions/abc"
        assert InMemoryTree().key is None

    def test_get_returns_copy(self):
        """Mutar o valor lido não altera a árvore."""
        ref = InMemoryTree().child("sessions/a")
        ref.set({"v": 1})
        value = ref.get()
        value["v"] = 2
        assert ref.get() == {"v": 1}

    def test_set_none_deletes(self):
        ref = InMemoryTree().child("sessions/a")
        ref.set({"v": 1})
        ref.set(None)
        assert ref.get() is None

    def test_delete_prunes_empty_parents(self):
        root = InMemoryTree()
        root.child("sessions/a").set({"v": 1})
        root.child("sessions/a").delete()
        assert root.child("sessions").get() is None
        assert root.get() is None

    def test_delete_subtree(self):
        root = InMemoryTree()
        root.child("sessions/a").set({"v": 1})
        root.child("sessions/b").set({"v": 2})
        root.child("other/c").set({"v": 3})

        root.child("sessions").delete()

        assert root.child("sessions").get() is None
        assert root.child("other/c").get() == {"v": 3}

    def test_delete_missing_is_noop(self):
        InMemoryTree().child("sessions/nope").delete()

    def test_empty_child_path_rejected(self):
        with pytest.raises(ValueError):
            InMemoryTree().child("/")
