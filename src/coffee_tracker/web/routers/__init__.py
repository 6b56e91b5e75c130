from coffee_tracker.web.routers.entries import router as entries_router
from coffee_tracker.web.routers.metadata import router as metadata_router

__all__ = [
    "entries_router",
    "metadata_router",
]
