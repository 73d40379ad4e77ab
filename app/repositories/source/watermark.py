"""Source watermark - the version the staleness check compares against."""

import duckdb

from app.models.summary import SourceWatermark

WATERMARK_SQL = """
SELECT
    (SELECT COUNT(*) FROM users),
    (SELECT COALESCE(MAX(id), 0) FROM users),
    (SELECT COUNT(*) FROM orders),
    (SELECT COALESCE(MAX(id), 0) FROM orders)
"""


def read_watermark(cur: duckdb.DuckDBPyConnection) -> SourceWatermark:
    """Read the current watermark; inside a transaction it matches that transaction's snapshot."""
    row = cur.execute(WATERMARK_SQL).fetchone()
    return SourceWatermark(
        users_count=int(row[0]),
        users_max_id=int(row[1]),
        orders_count=int(row[2]),
        orders_max_id=int(row[3]),
    )
