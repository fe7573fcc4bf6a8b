"""Shared fixtures: an in-memory application context driven by a controllable clock."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from proofcount.adapters.locks.in_process_lock_manager import InProcessLockManager
from proofcount.adapters.stores.in_memory_stores_repository import InMemoryStoresRepository
from proofcount.app.context import AppContext, build_context
from proofcount.app.main import create_app
from proofcount.settings import Settings

START_MS = 1_700_000_000_000


class FakeClock:
    def __init__(self, now_ms: int = START_MS) -> None:
        self.now_ms = now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stores_repo() -> InMemoryStoresRepository:
    return InMemoryStoresRepository()


@pytest.fixture
def context(stores_repo: InMemoryStoresRepository, clock: FakeClock) -> AppContext:
    return build_context(
        settings=Settings(),
        stores_repo=stores_repo,
        lock_manager=InProcessLockManager(),
        clock=clock,
    )


@pytest.fixture
def client(context: AppContext) -> TestClient:
    return TestClient(create_app(context))
