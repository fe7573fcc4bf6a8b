"""Pydantic models for store registry requests and responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from proofcount.domain.stores.models import StoreSettings

Timeframe = Literal["1hr", "1day", "1week", "alltime"]


class StoreSettingsPayload(BaseModel):
    """Display configuration as sent by the storefront admin UI."""

    model_config = ConfigDict(populate_by_name=True)

    timeframe: Timeframe
    minimum_count_to_show: int = Field(..., ge=0)
    display_text: str = Field(..., alias="displayText", description="Template with [count] and [time] tokens")

    def to_domain(self) -> StoreSettings:
        return StoreSettings(
            timeframe=self.timeframe,
            minimum_count_to_show=self.minimum_count_to_show,
            display_text=self.display_text,
        )


class CreateStoreRequest(BaseModel):
    store_name: str = Field(..., min_length=1)


class UpsertStoreRequest(BaseModel):
    store_name: str = Field(..., min_length=1)
    session: str
    settings: StoreSettingsPayload


class CreateStoreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    timeframe: str | None = None
    minimum_count_to_show: int | None = None
    display_text: str | None = Field(None, alias="displayText")


class UpsertStoreResponse(BaseModel):
    message: str


class StoreCheckResponse(BaseModel):
    """Check payload; always HTTP 200, with store=false when the store is unknown."""

    model_config = ConfigDict(populate_by_name=True)

    store: bool
    timeframe: str | None = None
    min_views: int | None = Field(None, alias="minViews")
    display_text: str | None = Field(None, alias="displayText")
    error: str | None = None
