"""API route modules."""

from stokmakmur.api.routes.categories import router as categories_router
from stokmakmur.api.routes.health import router as health_router
from stokmakmur.api.routes.insights import router as insights_router
from stokmakmur.api.routes.inventory import router as inventory_router
from stokmakmur.api.routes.sync import router as sync_router

__all__ = [
    "health_router",
    "inventory_router",
    "categories_router",
    "sync_router",
    "insights_router",
]
