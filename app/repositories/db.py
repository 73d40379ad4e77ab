"""DuckDB connection management."""

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH


def _tables_exist(conn: duckdb.DuckDBPyConnection) -> bool:
    """Check if source tables already exist."""
    try:
        result = conn.execute(
            "SELECT COUNT(*) FROM information_schema.tables WHERE table_name IN ('users', 'orders', 'summary_refresh_log')"
        ).fetchone()
        return result[0] == 3
    except duckdb.Error:
        return False


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    if _tables_exist(conn):
        return

    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized")


def connect(path: str = DB_PATH, read_only: bool = False) -> duckdb.DuckDBPyConnection:
    """Open a new connection; writable connections get the schema."""
    conn = duckdb.connect(path, read_only=read_only)
    if not read_only:
        init_tables(conn)
    logger.debug("DB connected: {} (read_only={})", path, read_only)
    return conn
