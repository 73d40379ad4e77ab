"""Snapshot repository - the materialized user order summary table."""

from dataclasses import dataclass

from loguru import logger

from app.models.summary import (
    GROUP_KEY,
    SNAPSHOT_COLUMNS,
    SNAPSHOT_TABLE,
    STAGING_TABLE,
    SUMMARY_SELECT,
    UNIQUE_INDEX,
    UserOrderSummary,
)
from app.repositories.base import BaseRepository
from app.repositories.session import Database
from app.repositories.summary.locks import ReadWriteGate


@dataclass
class ReconcileStats:
    """Row changes applied by a non-blocking refresh."""

    deleted: int
    updated: int
    inserted: int
    row_count: int


class SnapshotRepository(BaseRepository):
    """Storage for the summary snapshot and its unique index.

    Write methods expect to run inside a transaction opened by the caller;
    reads are single statements and therefore see one committed generation.
    """

    def __init__(self, db: Database, read_only: bool = True):
        super().__init__(db, read_only)
        self.gate = ReadWriteGate()

    def exists(self) -> bool:
        row = self.fetchone(
            """
            SELECT COUNT(*) FROM information_schema.tables
            WHERE table_name = ? AND table_type = 'BASE TABLE'
            """,
            [SNAPSHOT_TABLE],
        )
        return row[0] > 0

    def has_unique_index(self) -> bool:
        row = self.fetchone(
            "SELECT COUNT(*) FROM duckdb_indexes() WHERE table_name = ? AND is_unique",
            [SNAPSHOT_TABLE],
        )
        return row[0] > 0

    def create(self, unique_index: bool = True) -> int:
        """(Re)create the snapshot from current source data, return row count."""
        self._require_writable("create snapshot")
        self.execute(f"DROP INDEX IF EXISTS {UNIQUE_INDEX}")
        self.execute(f"DROP TABLE IF EXISTS {SNAPSHOT_TABLE}")
        self.execute(f"CREATE TABLE {SNAPSHOT_TABLE} AS {SUMMARY_SELECT}")
        if unique_index:
            self.create_unique_index()
        count = self.count()
        logger.debug("Snapshot created: {:,} rows (unique_index={})", count, unique_index)
        return count

    def create_unique_index(self) -> None:
        self._require_writable("create index")
        self.execute(f"CREATE UNIQUE INDEX IF NOT EXISTS {UNIQUE_INDEX} ON {SNAPSHOT_TABLE} ({GROUP_KEY})")
        logger.debug("Unique index {} on {}({})", UNIQUE_INDEX, SNAPSHOT_TABLE, GROUP_KEY)

    def replace(self) -> int:
        """Full swap: rebuild the table, keeping the unique index if it existed."""
        return self.create(unique_index=self.has_unique_index())

    def reconcile(self) -> ReconcileStats:
        """Recompute into a staging table and apply the difference by key.

        Unchanged rows are left alone, so readers on other cursors keep seeing
        the previous generation until the surrounding transaction commits. The
        staging table is a temp table of the calling cursor; a rollback discards it.
        """
        self._require_writable("reconcile snapshot")
        self.execute(f"CREATE OR REPLACE TEMP TABLE {STAGING_TABLE} AS {SUMMARY_SELECT}")

        deleted = self._count_rows(
            f"""
            DELETE FROM {SNAPSHOT_TABLE}
            WHERE {GROUP_KEY} NOT IN (SELECT {GROUP_KEY} FROM {STAGING_TABLE})
            """
        )
        updated = self._count_rows(
            f"""
            UPDATE {SNAPSHOT_TABLE}
            SET name = {STAGING_TABLE}.name,
                total_orders = {STAGING_TABLE}.total_orders,
                total_spent = {STAGING_TABLE}.total_spent
            FROM {STAGING_TABLE}
            WHERE {SNAPSHOT_TABLE}.{GROUP_KEY} = {STAGING_TABLE}.{GROUP_KEY}
              AND ({SNAPSHOT_TABLE}.name IS DISTINCT FROM {STAGING_TABLE}.name
                   OR {SNAPSHOT_TABLE}.total_orders IS DISTINCT FROM {STAGING_TABLE}.total_orders
                   OR {SNAPSHOT_TABLE}.total_spent IS DISTINCT FROM {STAGING_TABLE}.total_spent)
            """
        )
        inserted = self._count_rows(
            f"""
            INSERT INTO {SNAPSHOT_TABLE} ({SNAPSHOT_COLUMNS})
            SELECT {SNAPSHOT_COLUMNS} FROM {STAGING_TABLE}
            WHERE {GROUP_KEY} NOT IN (SELECT {GROUP_KEY} FROM {SNAPSHOT_TABLE})
            """
        )
        self.execute(f"DROP TABLE {STAGING_TABLE}")

        stats = ReconcileStats(deleted=deleted, updated=updated, inserted=inserted, row_count=self.count())
        logger.debug(
            "Snapshot reconciled: -{} ~{} +{} ({:,} rows)",
            stats.deleted,
            stats.updated,
            stats.inserted,
            stats.row_count,
        )
        return stats

    def _count_rows(self, statement: str) -> int:
        """Run a DML statement and return the affected row count."""
        row = self.fetchone(statement)
        return int(row[0]) if row else 0

    def fetch_all(self) -> list[UserOrderSummary]:
        rows = self.fetchall(f"SELECT {SNAPSHOT_COLUMNS} FROM {SNAPSHOT_TABLE} ORDER BY {GROUP_KEY}")
        return [UserOrderSummary.from_row(r) for r in rows]

    def fetch_one(self, user_id: int) -> UserOrderSummary | None:
        row = self.fetchone(
            f"SELECT {SNAPSHOT_COLUMNS} FROM {SNAPSHOT_TABLE} WHERE {GROUP_KEY} = ?",
            [user_id],
        )
        return UserOrderSummary.from_row(row) if row else None

    def count(self) -> int:
        return self.fetchone(f"SELECT COUNT(*) FROM {SNAPSHOT_TABLE}")[0]

    def drop(self) -> None:
        self._require_writable("drop snapshot")
        self.execute(f"DROP INDEX IF EXISTS {UNIQUE_INDEX}")
        self.execute(f"DROP TABLE IF EXISTS {SNAPSHOT_TABLE}")
        logger.info("Snapshot {} dropped", SNAPSHOT_TABLE)
