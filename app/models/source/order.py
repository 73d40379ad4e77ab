"""Order model."""

ORDERS_SEQUENCE_DDL = "CREATE SEQUENCE IF NOT EXISTS orders_id_seq START 1"

ORDERS_DDL = """
CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY DEFAULT nextval('orders_id_seq'),
    user_id INTEGER REFERENCES users(id),
    amount DECIMAL(10, 2),
    created_at TIMESTAMP DEFAULT current_timestamp
)
"""

ORDERS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_orders_user ON orders(user_id)",
]
