"""Common models - base classes and shared tables."""

from app.models.common.base import BaseEntity
from app.models.common.refresh_log import REFRESH_LOG_DDL

__all__ = [
    "BaseEntity",
    "REFRESH_LOG_DDL",
]
