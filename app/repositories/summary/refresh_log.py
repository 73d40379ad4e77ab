"""Refresh log repository - when and from which source version the snapshot was computed."""

from datetime import datetime

from loguru import logger

from app.models.summary import RefreshRecord, SourceWatermark
from app.repositories.base import BaseRepository

_COLUMNS = (
    "generation, mode, users_count, users_max_id, orders_count, orders_max_id, "
    "row_count, refreshed_at, duration_ms"
)


def _to_record(row: tuple) -> RefreshRecord:
    return RefreshRecord(
        generation=row[0],
        mode=row[1],
        watermark=SourceWatermark(
            users_count=row[2],
            users_max_id=row[3],
            orders_count=row[4],
            orders_max_id=row[5],
        ),
        row_count=row[6],
        refreshed_at=row[7],
        duration_ms=row[8],
    )


class RefreshLogRepository(BaseRepository):
    """Repository for the snapshot refresh log."""

    def record(
        self,
        mode: str,
        watermark: SourceWatermark,
        row_count: int,
        duration_ms: float,
    ) -> RefreshRecord:
        """Append an entry; call inside the transaction that wrote the snapshot."""
        self._require_writable("write refresh log")
        generation = self.fetchone("SELECT COALESCE(MAX(generation), 0) + 1 FROM summary_refresh_log")[0]
        record = RefreshRecord(
            generation=generation,
            mode=mode,
            watermark=watermark,
            row_count=row_count,
            refreshed_at=datetime.now(),
            duration_ms=round(duration_ms, 3),
        )
        self.execute(
            f"INSERT INTO summary_refresh_log ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                record.generation,
                record.mode,
                watermark.users_count,
                watermark.users_max_id,
                watermark.orders_count,
                watermark.orders_max_id,
                record.row_count,
                record.refreshed_at,
                record.duration_ms,
            ],
        )
        logger.debug("Refresh log: generation {} ({})", generation, mode)
        return record

    def latest(self) -> RefreshRecord | None:
        row = self.fetchone(f"SELECT {_COLUMNS} FROM summary_refresh_log ORDER BY generation DESC LIMIT 1")
        return _to_record(row) if row else None

    def history(self, limit: int = 20) -> list[RefreshRecord]:
        rows = self.fetchall(
            f"SELECT {_COLUMNS} FROM summary_refresh_log ORDER BY generation DESC LIMIT ?",
            [limit],
        )
        return [_to_record(r) for r in rows]

    def clear(self) -> None:
        self._require_writable("clear refresh log")
        self.execute("DELETE FROM summary_refresh_log")
        logger.info("Refresh log cleared")
