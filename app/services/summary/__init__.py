"""Summary services - the materialized aggregate lifecycle."""

from app.services.summary.manager import AggregateCacheManager

__all__ = [
    "AggregateCacheManager",
]
