"""Synthetic users and orders."""

from decimal import Decimal

import numpy as np
import polars as pl
from loguru import logger

from app.container import Container
from settings import MAX_AMOUNT, SEED, SEED_ORDERS, SEED_USERS


def users_frame(count: int, start: int = 1) -> pl.DataFrame:
    """Users named ``User N`` with ``userN@example.com``."""
    numbers = range(start, start + count)
    return pl.DataFrame(
        {
            "name": [f"User {i}" for i in numbers],
            "email": [f"user{i}@example.com" for i in numbers],
        },
        schema={"name": pl.Utf8, "email": pl.Utf8},
    )


def orders_frame(
    count: int,
    user_ids: np.ndarray,
    rng: np.random.Generator,
    max_amount: float = MAX_AMOUNT,
) -> pl.DataFrame:
    """Orders for uniformly chosen ``user_ids`` with amounts in ``[0, max_amount)``, rounded to cents."""
    return pl.DataFrame(
        {
            "user_id": rng.choice(user_ids, size=count).astype(np.int32),
            "amount": np.round(rng.random(count) * max_amount, 2),
        }
    )


def seed(
    container: Container,
    users: int = SEED_USERS,
    orders: int = SEED_ORDERS,
    rng_seed: int | None = SEED,
) -> dict:
    """Bulk insert synthetic users and orders in one transaction.

    Orders reference only the users created by this call.
    """
    if users <= 0 and orders > 0:
        raise ValueError("Cannot generate orders without users")

    rng = np.random.default_rng(rng_seed)
    start = container.users.count() + 1
    logger.info("Seeding {:,} users and {:,} orders (seed={})", users, orders, rng_seed)

    user_ids = np.array([], dtype=np.int32)
    with container.db.transaction():
        if users:
            container.users.add_frame(users_frame(users, start))
            rows = container.users.fetchall("SELECT id FROM users ORDER BY id DESC LIMIT ?", [users])
            user_ids = np.array([r[0] for r in rows], dtype=np.int32)
        if orders:
            container.orders.add_frame(orders_frame(orders, user_ids, rng))

    result = {
        "users": users,
        "orders": orders,
        "first_user_id": int(user_ids.min()) if users else None,
        "last_user_id": int(user_ids.max()) if users else None,
    }
    logger.info("Seed complete: {}", result)
    return result


def add_order(container: Container, user_id: int, amount: Decimal | float | str) -> int:
    """Insert a single order (the "new write" that makes the snapshot stale)."""
    order_id = container.orders.add(user_id, amount)
    logger.info("Order {} added for user {}: {}", order_id, user_id, amount)
    return order_id
