"""User repository - writes and lookups on the users relation."""

import polars as pl
from loguru import logger

from app.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user data access."""

    def add(self, name: str, email: str) -> int:
        """Insert one user, return its id."""
        self._require_writable("insert users")
        row = self.fetchone(
            "INSERT INTO users (name, email) VALUES (?, ?) RETURNING id",
            [name, email],
        )
        logger.debug("User added: id={}", row[0])
        return row[0]

    def add_frame(self, users_df: pl.DataFrame) -> int:
        """Bulk insert users from a frame with ``name`` and ``email`` columns."""
        self._require_writable("insert users")
        cur = self._db.cursor()
        cur.register("users_df", users_df)
        try:
            cur.execute("INSERT INTO users (name, email) SELECT name, email FROM users_df")
        finally:
            cur.unregister("users_df")
        logger.info("Users inserted: {:,}", users_df.height)
        return users_df.height

    def get(self, user_id: int) -> dict | None:
        row = self.fetchone("SELECT id, name, email, created_at FROM users WHERE id = ?", [user_id])
        if row is None:
            return None
        return {"id": row[0], "name": row[1], "email": row[2], "created_at": row[3]}

    def count(self) -> int:
        return self.fetchone("SELECT COUNT(*) FROM users")[0]
