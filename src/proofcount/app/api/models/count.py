"""Pydantic models for view count responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ViewCountResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    views_count: int = Field(..., alias="viewsCount", description="Views inside the store's timeframe")
    timeframe: str
    display_text: str = Field(..., alias="displayText", description="Empty when below minimum_count_to_show")


class ErrorResponse(BaseModel):
    error: str
