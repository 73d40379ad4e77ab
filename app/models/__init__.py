"""Models package - DDL and entities for all domains."""

from app.models.common import REFRESH_LOG_DDL, BaseEntity
from app.models.source import (
    ORDERS_DDL,
    ORDERS_INDEXES,
    ORDERS_SEQUENCE_DDL,
    USERS_DDL,
    USERS_SEQUENCE_DDL,
)
from app.models.summary import (
    RefreshMode,
    RefreshRecord,
    SnapshotStatus,
    SourceWatermark,
    UserOrderSummary,
)

ALL_DDL = [
    # Source
    USERS_SEQUENCE_DDL,
    USERS_DDL,
    ORDERS_SEQUENCE_DDL,
    ORDERS_DDL,
    *ORDERS_INDEXES,
    # Common
    REFRESH_LOG_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    "REFRESH_LOG_DDL",
    # Source
    "USERS_SEQUENCE_DDL",
    "USERS_DDL",
    "ORDERS_SEQUENCE_DDL",
    "ORDERS_DDL",
    "ORDERS_INDEXES",
    # Summary
    "RefreshMode",
    "UserOrderSummary",
    "SourceWatermark",
    "RefreshRecord",
    "SnapshotStatus",
    # All DDL
    "ALL_DDL",
]
