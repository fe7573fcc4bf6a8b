from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from proofcount.app.factory import create_adapters
from proofcount.application.store_registry import StoreRegistry
from proofcount.application.view_counter import ViewCounter
from proofcount.domain.common.clock import Clock
from proofcount.ports.lock_manager import LockManager
from proofcount.ports.stores_repository import StoresRepository
from proofcount.settings import Settings, get_settings


@dataclass
class AppContext:
    """Long-lived services shared by all requests; built once at start-up."""

    settings: Settings
    stores_repo: StoresRepository
    lock_manager: LockManager
    store_registry: StoreRegistry
    view_counter: ViewCounter

    def close(self) -> None:
        self.stores_repo.close()


def build_context(
    settings: Optional[Settings] = None,
    stores_repo: Optional[StoresRepository] = None,
    lock_manager: Optional[LockManager] = None,
    clock: Optional[Clock] = None,
) -> AppContext:
    settings = settings or get_settings()
    if stores_repo is None or lock_manager is None:
        default_repo, default_lock_manager = create_adapters(settings)
        stores_repo = stores_repo or default_repo
        lock_manager = lock_manager or default_lock_manager

    return AppContext(
        settings=settings,
        stores_repo=stores_repo,
        lock_manager=lock_manager,
        store_registry=StoreRegistry(stores_repo, lock_manager),
        view_counter=ViewCounter(stores_repo, lock_manager, clock=clock),
    )
