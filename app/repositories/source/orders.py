"""Order repository - writes and lookups on the orders relation."""

from decimal import Decimal

import polars as pl
from loguru import logger

from app.repositories.base import BaseRepository


class OrderRepository(BaseRepository):
    """Repository for order data access."""

    def add(self, user_id: int, amount: Decimal | float | str) -> int:
        """Insert one order, return its id."""
        self._require_writable("insert orders")
        row = self.fetchone(
            "INSERT INTO orders (user_id, amount) VALUES (?, CAST(? AS DECIMAL(10, 2))) RETURNING id",
            [user_id, str(amount)],
        )
        logger.debug("Order added: id={}, user={}, amount={}", row[0], user_id, amount)
        return row[0]

    def add_frame(self, orders_df: pl.DataFrame) -> int:
        """Bulk insert orders from a frame with ``user_id`` and ``amount`` columns."""
        self._require_writable("insert orders")
        cur = self._db.cursor()
        cur.register("orders_df", orders_df)
        try:
            cur.execute(
                """
                INSERT INTO orders (user_id, amount)
                SELECT user_id, CAST(amount AS DECIMAL(10, 2)) FROM orders_df
                """
            )
        finally:
            cur.unregister("orders_df")
        logger.info("Orders inserted: {:,}", orders_df.height)
        return orders_df.height

    def for_user(self, user_id: int) -> list[dict]:
        rows = self.fetchall(
            "SELECT id, amount, created_at FROM orders WHERE user_id = ? ORDER BY id",
            [user_id],
        )
        return [{"id": r[0], "amount": r[1], "created_at": r[2]} for r in rows]

    def count(self) -> int:
        return self.fetchone("SELECT COUNT(*) FROM orders")[0]
