"""Pydantic models for API requests and responses."""

from proofcount.app.api.models.count import ErrorResponse, ViewCountResponse
from proofcount.app.api.models.stores import (
    CreateStoreRequest,
    CreateStoreResponse,
    StoreCheckResponse,
    StoreSettingsPayload,
    UpsertStoreRequest,
    UpsertStoreResponse,
)

__all__ = [
    "ErrorResponse",
    "ViewCountResponse",
    "StoreSettingsPayload",
    "CreateStoreRequest",
    "CreateStoreResponse",
    "UpsertStoreRequest",
    "UpsertStoreResponse",
    "StoreCheckResponse",
]
