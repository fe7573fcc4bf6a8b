from __future__ import annotations

from typing import Dict, Optional, Protocol

from proofcount.domain.common.ids import ProductId
from proofcount.domain.stores.models import ProductCounter, Store


class StoresRepository(Protocol):
    def get_store(self, store_name: str) -> Optional[Store]: ...

    def save_store(self, store: Store) -> None: ...

    def save_products(self, store_name: str, products: Dict[ProductId, ProductCounter]) -> None: ...

    def close(self) -> None: ...
