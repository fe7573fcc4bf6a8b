"""API routers for storefront-facing endpoints."""

from proofcount.app.api.routers.count import router as count_router
from proofcount.app.api.routers.health import router as health_router
from proofcount.app.api.routers.stores import router as stores_router

__all__ = ["count_router", "stores_router", "health_router"]
