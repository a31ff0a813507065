from __future__ import annotations

import pytest

from firesession.config.settings import get_settings
from firesession.infra.session_store import FirebaseSessionStore
from firesession.infra.tree_memory import InMemoryTree
from tests.helpers.clock import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tree() -> InMemoryTree:
    return InMemoryTree()


@pytest.fixture()
def store(tree: InMemoryTree, clock: FakeClock) -> FirebaseSessionStore:
    return FirebaseSessionStore(tree, clock=clock, reap_interval=0)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    for var in (
        "FIRESESSION_DATABASE_URL",
        "FIRESESSION_ENVIRONMENT",
        "FIRESESSION_REAP_INTERVAL_SECONDS",
        "FIRESESSION_SESSIONS_COLLECTION",
        "FIRESESSION_CREDENTIALS_PATH",
        "FIRESESSION_AUTH_UID",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
