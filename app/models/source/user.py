"""User model."""

USERS_SEQUENCE_DDL = "CREATE SEQUENCE IF NOT EXISTS users_id_seq START 1"

USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY DEFAULT nextval('users_id_seq'),
    name VARCHAR(100),
    email VARCHAR(150),
    created_at TIMESTAMP DEFAULT current_timestamp
)
"""
