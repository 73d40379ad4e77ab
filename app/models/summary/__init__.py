"""Summary domain models - the materialized aggregate and its plain-view twin."""

from app.models.summary.entities import (
    RefreshMode,
    RefreshRecord,
    SnapshotStatus,
    SourceWatermark,
    UserOrderSummary,
)
from app.models.summary.summary import (
    GROUP_KEY,
    LIVE_VIEW,
    LIVE_VIEW_DDL,
    SNAPSHOT_COLUMNS,
    SNAPSHOT_TABLE,
    STAGING_TABLE,
    SUMMARY_SELECT,
    UNIQUE_INDEX,
)

__all__ = [
    "SNAPSHOT_TABLE",
    "STAGING_TABLE",
    "LIVE_VIEW",
    "LIVE_VIEW_DDL",
    "UNIQUE_INDEX",
    "GROUP_KEY",
    "SUMMARY_SELECT",
    "SNAPSHOT_COLUMNS",
    "RefreshMode",
    "UserOrderSummary",
    "SourceWatermark",
    "RefreshRecord",
    "SnapshotStatus",
]
