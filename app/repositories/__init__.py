"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.db import connect, init_tables
from app.repositories.session import Database
from app.repositories.source import OrderRepository, UserRepository, read_watermark
from app.repositories.summary import (
    LiveViewRepository,
    ReadWriteGate,
    ReconcileStats,
    RefreshLogRepository,
    SnapshotRepository,
)

__all__ = [
    # DB
    "connect",
    "init_tables",
    "Database",
    # Base
    "BaseRepository",
    # Source
    "UserRepository",
    "OrderRepository",
    "read_watermark",
    # Summary
    "SnapshotRepository",
    "ReconcileStats",
    "RefreshLogRepository",
    "LiveViewRepository",
    "ReadWriteGate",
]
