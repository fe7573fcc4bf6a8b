"""Router for store registration and settings endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from proofcount.app.api.dependencies import get_store_registry
from proofcount.app.api.models.count import ErrorResponse
from proofcount.app.api.models.stores import (
    CreateStoreRequest,
    CreateStoreResponse,
    StoreCheckResponse,
    UpsertStoreRequest,
    UpsertStoreResponse,
)
from proofcount.application.store_registry import StoreRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store")


@router.get("/check", response_model=StoreCheckResponse, response_model_exclude_none=True)
def check_store(
    store: str = Query(..., min_length=1, description="Store name to look up"),
    registry: StoreRegistry = Depends(get_store_registry),
) -> StoreCheckResponse:
    """Report whether a store is registered and, if so, its display settings."""
    try:
        settings = registry.check_store(store)
    except Exception:
        logger.exception(f"Error checking store {store}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if settings is None:
        return StoreCheckResponse(store=False, error="Store not found")
    return StoreCheckResponse(
        store=True,
        timeframe=settings.timeframe,
        min_views=settings.minimum_count_to_show,
        display_text=settings.display_text,
    )


@router.post(
    "/create",
    response_model=CreateStoreResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
def create_store(
    req: CreateStoreRequest,
    registry: StoreRegistry = Depends(get_store_registry),
) -> CreateStoreResponse:
    """Register a store with default settings. An existing store is reported, not modified."""
    try:
        result = registry.create_store(req.store_name)
    except Exception:
        logger.exception(f"Error creating store {req.store_name}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if result.settings is None:
        return CreateStoreResponse(success=result.success, message=result.message)
    return CreateStoreResponse(
        success=result.success,
        message=result.message,
        timeframe=result.settings.timeframe,
        minimum_count_to_show=result.settings.minimum_count_to_show,
        display_text=result.settings.display_text,
    )


@router.post("", response_model=UpsertStoreResponse, responses={500: {"model": ErrorResponse}})
def upsert_store(
    req: UpsertStoreRequest,
    registry: StoreRegistry = Depends(get_store_registry),
) -> UpsertStoreResponse:
    """Create a store or overwrite its session and settings."""
    settings = req.settings.to_domain()
    try:
        result = registry.upsert_store_settings(req.store_name, req.session, settings)
    except Exception:
        logger.exception(f"Error saving settings for store {req.store_name}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return UpsertStoreResponse(message=result.message)
