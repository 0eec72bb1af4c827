"""API routers package."""

from captable.api.routers.directory import router as directory_router
from captable.api.routers.split_configs import router as split_config_router
from captable.api.routers.postings import router as postings_router
from captable.api.routers.positions import router as positions_router

__all__ = [
    "directory_router",
    "split_config_router",
    "postings_router",
    "positions_router",
]
