"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("ORDERS_DB_PATH", "orders.duckdb")

# Logging
LOG_DIR = Path(os.getenv("ORDERS_LOG_DIR", "logs"))

# Synthetic data
SEED_USERS = int(os.getenv("ORDERS_SEED_USERS", "500000"))
SEED_ORDERS = int(os.getenv("ORDERS_SEED_ORDERS", "300000"))
SEED = int(os.environ["ORDERS_SEED"]) if os.getenv("ORDERS_SEED") else None
MAX_AMOUNT = 1000

# Benchmark
BENCH_REPEAT = int(os.getenv("ORDERS_BENCH_REPEAT", "5"))
