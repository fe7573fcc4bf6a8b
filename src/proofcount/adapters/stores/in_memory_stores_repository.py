from __future__ import annotations

import threading
from typing import Dict, List, Optional

from proofcount.domain.common.ids import ProductId
from proofcount.domain.stores.models import ProductCounter, Store
from proofcount.ports.stores_repository import StoresRepository


class InMemoryStoresRepository(StoresRepository):
    """Keeps store documents in a dict keyed by store_name; reads and writes are copies."""

    def __init__(self, stores: Optional[List[Store]] = None) -> None:
        self._documents: Dict[str, dict] = {}
        self._lock = threading.Lock()
        for store in stores or []:
            self.save_store(store)

    def get_store(self, store_name: str) -> Optional[Store]:
        with self._lock:
            doc = self._documents.get(store_name)
            if doc is None:
                return None
            return Store.from_document(doc)

    def save_store(self, store: Store) -> None:
        with self._lock:
            self._documents[store.store_name] = store.to_document()

    def save_products(self, store_name: str, products: Dict[ProductId, ProductCounter]) -> None:
        with self._lock:
            doc = self._documents.get(store_name)
            if doc is None:
                raise KeyError(f"Store {store_name} does not exist")
            doc["products"] = {str(pid): counter.to_document() for pid, counter in products.items()}

    def close(self) -> None:
        return None
