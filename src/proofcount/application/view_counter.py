from __future__ import annotations

import logging
from typing import Optional

from proofcount.application.errors import StoreNotFoundError
from proofcount.domain.common.clock import Clock, current_time_ms
from proofcount.domain.view_counter.evaluator import ViewCountResult, record_view
from proofcount.ports.lock_manager import LockManager
from proofcount.ports.stores_repository import StoresRepository

logger = logging.getLogger(__name__)


class ViewCounter:
    def __init__(
        self,
        stores_repo: StoresRepository,
        lock_manager: LockManager,
        clock: Optional[Clock] = None,
    ) -> None:
        self.stores_repo = stores_repo
        self.lock_manager = lock_manager
        self.clock = clock or current_time_ms

    def record_view(self, store_name: str, product_id: str) -> ViewCountResult:
        """
        Record a view of product_id and return the sliding-window count with rendered text.

        Raises:
            StoreNotFoundError: If no store is registered under store_name
        """
        self.lock_manager.acquire(store_name)
        try:
            store = self.stores_repo.get_store(store_name)
            if store is None:
                raise StoreNotFoundError(store_name)

            result = record_view(store, product_id, self.clock())
            self.stores_repo.save_products(store_name, store.products)
        finally:
            self.lock_manager.release(store_name)

        logger.debug(
            f"Recorded view store={store_name} product={product_id} "
            f"count={result.views_count} timeframe={result.timeframe}"
        )
        return result
