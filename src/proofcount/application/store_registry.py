from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from proofcount.domain.stores.models import Store, StoreSettings
from proofcount.ports.lock_manager import LockManager
from proofcount.ports.stores_repository import StoresRepository

logger = logging.getLogger(__name__)

MESSAGE_STORE_EXISTS = "Store already exists"
MESSAGE_STORE_CREATED = "New store created successfully"
MESSAGE_STORE_UPDATED = "Store settings updated successfully"


@dataclass(frozen=True)
class CreateStoreResult:
    success: bool
    message: str
    settings: Optional[StoreSettings] = None


@dataclass(frozen=True)
class UpsertStoreResult:
    created: bool
    message: str


class StoreRegistry:
    """Registers storefronts and manages their display settings."""

    def __init__(self, stores_repo: StoresRepository, lock_manager: LockManager) -> None:
        self.stores_repo = stores_repo
        self.lock_manager = lock_manager

    def create_store(self, store_name: str) -> CreateStoreResult:
        """Create a store with default settings; an existing store is left untouched."""
        self.lock_manager.acquire(store_name)
        try:
            if self.stores_repo.get_store(store_name) is not None:
                return CreateStoreResult(success=False, message=MESSAGE_STORE_EXISTS)

            store = Store.new(store_name)
            self.stores_repo.save_store(store)
            logger.info(f"Created store {store_name} with default settings")
            return CreateStoreResult(success=True, message=MESSAGE_STORE_CREATED, settings=store.settings)
        finally:
            self.lock_manager.release(store_name)

    def upsert_store_settings(self, store_name: str, session: str, settings: StoreSettings) -> UpsertStoreResult:
        """Overwrite session and settings of an existing store, or create it. Products are preserved."""
        self.lock_manager.acquire(store_name)
        try:
            store = self.stores_repo.get_store(store_name)
            existed = store is not None

            if store is not None:
                store.session = session
                store.settings = settings
            else:
                store = Store.new(store_name, session=session, settings=settings)

            self.stores_repo.save_store(store)
        finally:
            self.lock_manager.release(store_name)

        if existed:
            logger.info(f"Updated settings for store {store_name} (timeframe={settings.timeframe})")
            return UpsertStoreResult(created=False, message=MESSAGE_STORE_UPDATED)
        logger.info(f"Created store {store_name} from settings (timeframe={settings.timeframe})")
        return UpsertStoreResult(created=True, message=MESSAGE_STORE_CREATED)

    def check_store(self, store_name: str) -> Optional[StoreSettings]:
        """Return the store's settings, or None when it is not registered."""
        store = self.stores_repo.get_store(store_name)
        return store.settings if store is not None else None
