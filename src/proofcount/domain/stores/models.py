from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from proofcount.domain.common.ids import ProductId, StoreName
from proofcount.domain.stores import timeframes

DEFAULT_SESSION = "session1"
DEFAULT_TIMEFRAME = timeframes.ONE_DAY
DEFAULT_MINIMUM_COUNT_TO_SHOW = 0
DEFAULT_DISPLAY_TEXT = "[count] views in last [time]"


@dataclass(frozen=True)
class StoreSettings:
    timeframe: str
    minimum_count_to_show: int
    display_text: str

    def __post_init__(self) -> None:
        if not timeframes.is_valid_timeframe(self.timeframe):
            raise timeframes.InvalidTimeframeError(self.timeframe)
        if self.minimum_count_to_show < 0:
            raise ValueError("minimum_count_to_show must be non-negative")

    @staticmethod
    def defaults() -> "StoreSettings":
        return StoreSettings(
            timeframe=DEFAULT_TIMEFRAME,
            minimum_count_to_show=DEFAULT_MINIMUM_COUNT_TO_SHOW,
            display_text=DEFAULT_DISPLAY_TEXT,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "timeframe": self.timeframe,
            "minimum_count_to_show": self.minimum_count_to_show,
            "displayText": self.display_text,
        }

    @staticmethod
    def from_document(doc: dict[str, Any]) -> "StoreSettings":
        return StoreSettings(
            timeframe=str(doc["timeframe"]),
            minimum_count_to_show=int(doc["minimum_count_to_show"]),
            display_text=str(doc["displayText"]),
        )


@dataclass
class ProductCounter:
    """View timestamps (epoch ms, arrival order) and the last computed in-window count."""

    views: List[int] = field(default_factory=list)
    count: int = 0

    def to_document(self) -> dict[str, Any]:
        return {"views": list(self.views), "count": self.count}

    @staticmethod
    def from_document(doc: dict[str, Any]) -> "ProductCounter":
        return ProductCounter(
            views=[int(ts) for ts in doc.get("views") or []],
            count=int(doc.get("count") or 0),
        )


@dataclass
class Store:
    store_name: StoreName
    session: str
    settings: StoreSettings
    products: Dict[ProductId, ProductCounter] = field(default_factory=dict)

    @staticmethod
    def new(
        store_name: str,
        session: str = DEFAULT_SESSION,
        settings: StoreSettings | None = None,
    ) -> "Store":
        return Store(
            store_name=StoreName(store_name),
            session=session,
            settings=settings or StoreSettings.defaults(),
        )

    def products_document(self) -> dict[str, Any]:
        return {str(pid): counter.to_document() for pid, counter in self.products.items()}

    def to_document(self) -> dict[str, Any]:
        return {
            "store_name": self.store_name,
            "session": self.session,
            "settings": self.settings.to_document(),
            "products": self.products_document(),
        }

    @staticmethod
    def products_from_document(doc: dict[str, Any] | None) -> Dict[ProductId, ProductCounter]:
        return {ProductId(pid): ProductCounter.from_document(counter) for pid, counter in (doc or {}).items()}

    @staticmethod
    def from_document(doc: dict[str, Any]) -> "Store":
        return Store(
            store_name=StoreName(str(doc["store_name"])),
            session=str(doc["session"]),
            settings=StoreSettings.from_document(doc["settings"]),
            products=Store.products_from_document(doc.get("products")),
        )
