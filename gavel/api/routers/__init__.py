"""API routers for different resource types."""

from gavel.api.routers.auction import router as auction_router

__all__ = ["auction_router"]
