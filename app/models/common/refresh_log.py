"""Refresh log table - one row per build or refresh of the summary snapshot."""

REFRESH_LOG_DDL = """
CREATE TABLE IF NOT EXISTS summary_refresh_log (
    generation INTEGER PRIMARY KEY,
    mode VARCHAR NOT NULL,
    users_count BIGINT NOT NULL,
    users_max_id BIGINT NOT NULL,
    orders_count BIGINT NOT NULL,
    orders_max_id BIGINT NOT NULL,
    row_count BIGINT NOT NULL,
    refreshed_at TIMESTAMP NOT NULL,
    duration_ms DOUBLE NOT NULL
)
"""
