from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from proofcount.domain.common.ids import ProductId
from proofcount.domain.stores import timeframes
from proofcount.domain.stores.models import ProductCounter, Store, StoreSettings

COUNT_TOKEN = "[count]"
TIME_TOKEN = "[time]"


@dataclass(frozen=True)
class ViewCountResult:
    views_count: int
    timeframe: str
    display_text: str


def count_within_window(views: Iterable[int], now_ms: int, window_ms: int) -> int:
    # Filters the full list; views are not assumed to be sorted.
    return sum(1 for ts in views if now_ms - ts < window_ms)


def render_display_text(settings: StoreSettings, count: int) -> str:
    if count < settings.minimum_count_to_show:
        return ""
    return settings.display_text.replace(COUNT_TOKEN, str(count)).replace(
        TIME_TOKEN, timeframes.label(settings.timeframe)
    )


def record_view(store: Store, product_id: str, now_ms: int) -> ViewCountResult:
    """
    Append a view for product_id to the store and recompute its sliding-window count.

    Mutates store.products in place: the counter is created on first view and its
    cached count is refreshed. Persisting the store is left to the caller.
    """
    counter = store.products.get(ProductId(product_id))
    if counter is None:
        counter = ProductCounter()
        store.products[ProductId(product_id)] = counter

    counter.views.append(now_ms)

    settings = store.settings
    counter.count = count_within_window(counter.views, now_ms, timeframes.window_ms(settings.timeframe))

    return ViewCountResult(
        views_count=counter.count,
        timeframe=settings.timeframe,
        display_text=render_display_text(settings, counter.count),
    )
