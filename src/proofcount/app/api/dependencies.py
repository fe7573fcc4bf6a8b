"""FastAPI dependencies resolving services from the application context."""

from __future__ import annotations

from fastapi import Depends, Request

from proofcount.app.context import AppContext
from proofcount.application.store_registry import StoreRegistry
from proofcount.application.view_counter import ViewCounter


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_store_registry(context: AppContext = Depends(get_app_context)) -> StoreRegistry:
    return context.store_registry


def get_view_counter(context: AppContext = Depends(get_app_context)) -> ViewCounter:
    return context.view_counter
