"""Base repository class."""

from typing import Any

from loguru import logger

from app.repositories.session import Database


class BaseRepository:
    """Base repository with common functionality.

    Repositories never open connections themselves; the owner of the
    ``Database`` (usually the container) passes it in.
    """

    def __init__(self, db: Database, read_only: bool = True):
        self._db = db
        self._read_only = read_only
        logger.debug("{} initialized", self.__class__.__name__)

    @property
    def db(self) -> Database:
        return self._db

    def _require_writable(self, action: str) -> None:
        if self._read_only:
            raise RuntimeError(f"Cannot {action} in read-only mode")

    def transaction(self):
        """Transaction on the calling thread's cursor."""
        return self._db.transaction()

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.cursor().execute(query, params)
        return self._db.cursor().execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()
