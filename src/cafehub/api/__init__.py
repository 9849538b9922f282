"""CafeHub API package."""

from cafehub.api.routes import cafe_router, rating_router

__all__ = ["cafe_router", "rating_router"]
