"""Aggregate cache manager - lifecycle of the materialized user order summary.

The snapshot trades freshness for read latency: it is computed once by
``build``, left untouched while orders keep arriving, and wholly replaced by
``refresh``. Nothing here schedules refreshes; the caller decides when.
"""

import threading
import time
from collections.abc import Callable

import duckdb
from loguru import logger

from app.errors import BuildError, ReadError, RefreshError
from app.models.summary import (
    SNAPSHOT_TABLE,
    RefreshMode,
    RefreshRecord,
    SnapshotStatus,
    UserOrderSummary,
)
from app.repositories.source import read_watermark
from app.repositories.summary import RefreshLogRepository, SnapshotRepository

Predicate = Callable[[UserOrderSummary], bool]


class AggregateCacheManager:
    """Builds, refreshes and serves the user order summary snapshot."""

    def __init__(self, snapshot_repo: SnapshotRepository, refresh_log_repo: RefreshLogRepository):
        self._snapshot = snapshot_repo
        self._log = refresh_log_repo
        # Single writer role: a second build/refresh/drop is rejected, not queued.
        self._writer = threading.Lock()
        logger.debug("AggregateCacheManager initialized")

    def _acquire_writer(self, error: type[Exception], action: str) -> None:
        if not self._writer.acquire(blocking=False):
            raise error(f"Cannot {action} {SNAPSHOT_TABLE}: refresh already in progress")

    def build(self, unique_index: bool = True) -> RefreshRecord:
        """Compute the summary from current source data and persist it.

        An existing snapshot is replaced. With ``unique_index`` the grouping
        key gets a unique index, which non-blocking refreshes require.
        """
        self._acquire_writer(BuildError, "build")
        try:
            with self._snapshot.gate.exclusive():
                start = time.perf_counter()
                try:
                    with self._snapshot.transaction() as cur:
                        watermark = read_watermark(cur)
                        row_count = self._snapshot.create(unique_index=unique_index)
                        record = self._log.record(
                            "build",
                            watermark,
                            row_count,
                            (time.perf_counter() - start) * 1000,
                        )
                except duckdb.Error as e:
                    logger.error("Build of {} failed: {}", SNAPSHOT_TABLE, e)
                    raise BuildError(f"Cannot build {SNAPSHOT_TABLE}: {e}") from e
        finally:
            self._writer.release()

        logger.info(
            "Built {}: {:,} rows in {:.1f} ms (generation {})",
            SNAPSHOT_TABLE,
            record.row_count,
            record.duration_ms,
            record.generation,
        )
        return record

    def ensure_unique_index(self) -> None:
        """Add the unique index on the grouping key if it is missing."""
        if not self._snapshot.exists():
            raise ReadError(f"{SNAPSHOT_TABLE} has not been built")
        if self._snapshot.has_unique_index():
            return
        try:
            self._snapshot.create_unique_index()
        except duckdb.Error as e:
            raise BuildError(f"Cannot index {SNAPSHOT_TABLE}: {e}") from e
        logger.info("Unique index added to {}", SNAPSHOT_TABLE)

    def refresh(self, mode: RefreshMode | str = RefreshMode.EXCLUSIVE) -> RefreshRecord:
        """Recompute the whole snapshot from current source data.

        EXCLUSIVE keeps readers out until the new snapshot is committed.
        NON_BLOCKING keeps serving the previous snapshot and swaps atomically,
        which needs the unique index on the grouping key.
        On failure the previous snapshot stays as it was.
        """
        mode = RefreshMode(mode)
        self._acquire_writer(RefreshError, "refresh")
        try:
            if not self._snapshot.exists():
                raise RefreshError(f"Cannot refresh {SNAPSHOT_TABLE}: it has not been built")
            if mode is RefreshMode.EXCLUSIVE:
                with self._snapshot.gate.exclusive():
                    record = self._recompute(mode, self._snapshot.replace)
            else:
                if not self._snapshot.has_unique_index():
                    raise RefreshError(
                        f"Cannot refresh {SNAPSHOT_TABLE} without blocking readers: "
                        "missing uniqueness guarantee on the grouping key"
                    )
                record = self._recompute(mode, lambda: self._snapshot.reconcile().row_count)
        finally:
            self._writer.release()

        logger.info(
            "Refreshed {} ({}): {:,} rows in {:.1f} ms (generation {})",
            SNAPSHOT_TABLE,
            mode.value,
            record.row_count,
            record.duration_ms,
            record.generation,
        )
        return record

    def _recompute(self, mode: RefreshMode, apply: Callable[[], int]) -> RefreshRecord:
        start = time.perf_counter()
        try:
            with self._snapshot.transaction() as cur:
                watermark = read_watermark(cur)
                row_count = apply()
                return self._log.record(mode.value, watermark, row_count, (time.perf_counter() - start) * 1000)
        except duckdb.Error as e:
            logger.error("Refresh of {} ({}) failed, previous snapshot kept: {}", SNAPSHOT_TABLE, mode.value, e)
            raise RefreshError(f"Cannot refresh {SNAPSHOT_TABLE}: {e}") from e

    def query(self, predicate: Predicate | None = None) -> list[UserOrderSummary]:
        """Rows of the last successful build/refresh, optionally filtered.

        The snapshot is read with one statement, so the result always comes
        from a single generation.
        """
        with self._snapshot.gate.shared():
            rows = self._read(self._snapshot.fetch_all)
        if predicate is None:
            return rows
        return [r for r in rows if predicate(r)]

    def get(self, user_id: int) -> UserOrderSummary | None:
        """Snapshot row for one user (None if the user had no orders at refresh time)."""
        with self._snapshot.gate.shared():
            return self._read(lambda: self._snapshot.fetch_one(user_id))

    def _read(self, fetch: Callable):
        if not self._snapshot.exists():
            raise ReadError(f"{SNAPSHOT_TABLE} has not been built")
        try:
            return fetch()
        except duckdb.CatalogException as e:
            # Dropped between the existence check and the read.
            raise ReadError(f"{SNAPSHOT_TABLE} has not been built") from e

    def is_stale(self) -> bool:
        """True if source tables changed since the last build/refresh."""
        last = self._log.latest()
        if last is None or not self._snapshot.exists():
            raise ReadError(f"{SNAPSHOT_TABLE} has not been built")
        return read_watermark(self._snapshot.db.cursor()) != last.watermark

    def status(self) -> SnapshotStatus:
        if not self._snapshot.exists():
            return SnapshotStatus(built=False, has_unique_index=False, row_count=0, last_refresh=None, stale=None)
        last = self._log.latest()
        stale = None
        if last is not None:
            stale = read_watermark(self._snapshot.db.cursor()) != last.watermark
        return SnapshotStatus(
            built=True,
            has_unique_index=self._snapshot.has_unique_index(),
            row_count=self._snapshot.count(),
            last_refresh=last,
            stale=stale,
        )

    def drop(self) -> None:
        """Drop the snapshot and forget its refresh history."""
        self._acquire_writer(RefreshError, "drop")
        try:
            with self._snapshot.gate.exclusive():
                with self._snapshot.transaction():
                    self._snapshot.drop()
                    self._log.clear()
        finally:
            self._writer.release()
