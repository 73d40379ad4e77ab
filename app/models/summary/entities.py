"""Summary domain entities - snapshot rows, watermarks, refresh bookkeeping."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.models.common import BaseEntity


class RefreshMode(str, Enum):
    """How a refresh interacts with concurrent readers."""

    EXCLUSIVE = "exclusive"
    NON_BLOCKING = "non_blocking"


@dataclass
class UserOrderSummary(BaseEntity):
    """One snapshot row: order count and total for a user."""

    user_id: int
    name: str | None
    total_orders: int
    total_spent: Decimal

    @classmethod
    def from_row(cls, row: tuple) -> "UserOrderSummary":
        return cls(user_id=row[0], name=row[1], total_orders=int(row[2]), total_spent=row[3])


@dataclass
class SourceWatermark(BaseEntity):
    """Version of the source relations.

    Sources are insert-only, so any committed insert changes at least one field.
    """

    users_count: int
    users_max_id: int
    orders_count: int
    orders_max_id: int


@dataclass
class RefreshRecord(BaseEntity):
    """Result of a build or refresh, as stored in the refresh log."""

    generation: int
    mode: str
    watermark: SourceWatermark
    row_count: int
    refreshed_at: datetime
    duration_ms: float


@dataclass
class SnapshotStatus(BaseEntity):
    """Current state of the summary snapshot."""

    built: bool
    has_unique_index: bool
    row_count: int
    last_refresh: RefreshRecord | None
    stale: bool | None
