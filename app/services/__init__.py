"""Services package - service class exports."""

from app.services.summary.manager import AggregateCacheManager

__all__ = [
    "AggregateCacheManager",
]
