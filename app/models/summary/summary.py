"""User order summary - the aggregate query and the objects derived from it."""

SNAPSHOT_TABLE = "user_order_summary_mv"
STAGING_TABLE = "user_order_summary_mv_staging"
LIVE_VIEW = "user_order_summary_view"
UNIQUE_INDEX = "idx_user_order_mv_id"

# Grouping key of the summary; the unique index and key lookups use it.
GROUP_KEY = "id"

SUMMARY_SELECT = """
SELECT
    u.id,
    u.name,
    COUNT(o.id) AS total_orders,
    SUM(o.amount) AS total_spent
FROM users u
JOIN orders o ON o.user_id = u.id
GROUP BY u.id, u.name
"""

LIVE_VIEW_DDL = f"CREATE OR REPLACE VIEW {LIVE_VIEW} AS {SUMMARY_SELECT}"

SNAPSHOT_COLUMNS = "id, name, total_orders, total_spent"
