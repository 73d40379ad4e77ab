"""Per-thread cursors and transactions over one DuckDB connection."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import duckdb
from loguru import logger


class Database:
    """Owns a DuckDB connection and hands each thread its own cursor.

    DuckDB connections must not be shared between threads; ``conn.cursor()``
    opens a sibling connection to the same database. All repositories built on
    one ``Database`` share the calling thread's cursor, so their statements can
    join a single transaction. Cursors of threads that have finished are closed
    the next time a new thread asks for one.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self._conn = conn
        self._local = threading.local()
        self._lock = threading.Lock()
        self._cursors: dict[threading.Thread, duckdb.DuckDBPyConnection] = {}

    def cursor(self) -> duckdb.DuckDBPyConnection:
        """Get the calling thread's cursor."""
        cur = getattr(self._local, "cursor", None)
        if cur is None:
            with self._lock:
                self._release_finished()
                cur = self._conn.cursor()
                self._cursors[threading.current_thread()] = cur
            self._local.cursor = cur
            logger.debug("Opened cursor for thread {}", threading.current_thread().name)
        return cur

    def _release_finished(self) -> None:
        """Close cursors whose thread is no longer alive (caller holds the lock)."""
        for thread in [t for t in self._cursors if not t.is_alive()]:
            self._cursors.pop(thread).close()
            logger.debug("Closed cursor of finished thread {}", thread.name)

    @property
    def open_cursors(self) -> int:
        with self._lock:
            return len(self._cursors)

    @contextmanager
    def transaction(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Run the block in one transaction on the calling thread's cursor.

        Any failure, including a failed COMMIT, ends in ROLLBACK.
        """
        cur = self.cursor()
        cur.execute("BEGIN TRANSACTION")
        try:
            yield cur
            cur.execute("COMMIT")
        except Exception:
            self._rollback(cur)
            raise

    @staticmethod
    def _rollback(cur: duckdb.DuckDBPyConnection) -> None:
        try:
            cur.execute("ROLLBACK")
        except duckdb.TransactionException as e:
            # A failed COMMIT has already ended the transaction.
            logger.debug("Nothing to roll back: {}", e)

    def close(self) -> None:
        """Close all cursors and the underlying connection."""
        with self._lock:
            for cur in self._cursors.values():
                cur.close()
            self._cursors.clear()
        self._local = threading.local()
        self._conn.close()
        logger.debug("Database closed")
