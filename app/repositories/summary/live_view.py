"""Live view repository - the plain (non-materialized) summary view."""

from loguru import logger

from app.models.summary import GROUP_KEY, LIVE_VIEW, LIVE_VIEW_DDL, SNAPSHOT_COLUMNS, SUMMARY_SELECT, UserOrderSummary
from app.repositories.base import BaseRepository


class LiveViewRepository(BaseRepository):
    """Always-fresh reads: every query re-runs the aggregation."""

    def create_view(self) -> None:
        self._require_writable("create view")
        self.execute(LIVE_VIEW_DDL)
        logger.info("View {} created", LIVE_VIEW)

    def view_exists(self) -> bool:
        row = self.fetchone(
            "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = ? AND table_type = 'VIEW'",
            [LIVE_VIEW],
        )
        return row[0] > 0

    def fetch_all(self) -> list[UserOrderSummary]:
        """Read the summary through the view."""
        rows = self.fetchall(f"SELECT {SNAPSHOT_COLUMNS} FROM {LIVE_VIEW} ORDER BY {GROUP_KEY}")
        return [UserOrderSummary.from_row(r) for r in rows]

    def fetch_one(self, user_id: int) -> UserOrderSummary | None:
        row = self.fetchone(f"SELECT {SNAPSHOT_COLUMNS} FROM {LIVE_VIEW} WHERE {GROUP_KEY} = ?", [user_id])
        return UserOrderSummary.from_row(row) if row else None

    def aggregate(self) -> list[UserOrderSummary]:
        """Run the aggregation directly, without any view."""
        rows = self.fetchall(f"SELECT * FROM ({SUMMARY_SELECT}) ORDER BY {GROUP_KEY}")
        return [UserOrderSummary.from_row(r) for r in rows]
