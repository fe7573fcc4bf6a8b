"""Router for the product view count endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from proofcount.app.api.dependencies import get_view_counter
from proofcount.app.api.models.count import ErrorResponse, ViewCountResponse
from proofcount.application.errors import StoreNotFoundError
from proofcount.application.view_counter import ViewCounter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/count",
    response_model=ViewCountResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def count_product_view(
    store: str = Query(..., min_length=1, description="Registered store name"),
    product: str = Query(..., min_length=1, description="Product identifier within the store"),
    view_counter: ViewCounter = Depends(get_view_counter),
) -> ViewCountResponse:
    """
    Record a view of a product and return the number of views inside the store's timeframe.

    displayText is the store's template with [count] and [time] substituted, or an
    empty string while the count is below minimum_count_to_show.
    """
    try:
        result = view_counter.record_view(store, product)
    except StoreNotFoundError:
        raise HTTPException(status_code=404, detail="Store not found")
    except Exception:
        logger.exception(f"Error recording view for store={store} product={product}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return ViewCountResponse(
        views_count=result.views_count,
        timeframe=result.timeframe,
        display_text=result.display_text,
    )
