"""Summary repositories - snapshot table, refresh log, live view."""

from app.repositories.summary.live_view import LiveViewRepository
from app.repositories.summary.locks import ReadWriteGate
from app.repositories.summary.refresh_log import RefreshLogRepository
from app.repositories.summary.snapshot import ReconcileStats, SnapshotRepository

__all__ = [
    "SnapshotRepository",
    "ReconcileStats",
    "RefreshLogRepository",
    "LiveViewRepository",
    "ReadWriteGate",
]
