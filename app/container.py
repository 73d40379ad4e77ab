"""Dependency container - one explicitly owned set of repositories and services per database."""

import duckdb
from loguru import logger

from app.repositories import (
    Database,
    LiveViewRepository,
    OrderRepository,
    RefreshLogRepository,
    SnapshotRepository,
    UserRepository,
    connect,
)
from app.services.summary import AggregateCacheManager
from settings import DB_PATH


class Container:
    """Repositories and the summary manager sharing one database.

    Created explicitly and passed to callers; there is no global instance.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection, read_only: bool = False):
        self.db = Database(conn)

        # Repositories
        self.users = UserRepository(self.db, read_only=read_only)
        self.orders = OrderRepository(self.db, read_only=read_only)
        self.snapshot = SnapshotRepository(self.db, read_only=read_only)
        self.refresh_log = RefreshLogRepository(self.db, read_only=read_only)
        self.live_view = LiveViewRepository(self.db, read_only=read_only)

        # Services (with injected repos)
        self.summary = AggregateCacheManager(
            snapshot_repo=self.snapshot,
            refresh_log_repo=self.refresh_log,
        )
        logger.debug("Container initialized (read_only={})", read_only)

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_container(path: str = DB_PATH, read_only: bool = False) -> Container:
    """Connect to the database at ``path`` (schema created if writable)."""
    return Container(connect(path, read_only=read_only), read_only=read_only)
