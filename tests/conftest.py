"""Shared fixtures - in-memory databases wired through the container."""

from decimal import Decimal

import pytest

from app.container import Container
from app.repositories.db import connect

# (user, amount) for the reference scenario: 3 users, 5 orders.
SCENARIO_ORDERS = [
    (1, Decimal("10.00")),
    (1, Decimal("20.00")),
    (2, Decimal("10.00")),
    (3, Decimal("12.50")),
    (3, Decimal("12.50")),
]


@pytest.fixture
def container():
    c = Container(connect(":memory:"))
    yield c
    c.close()


@pytest.fixture
def scenario(container):
    """Container with users 1-3 and the five scenario orders."""
    for i in range(1, 4):
        container.users.add(f"User {i}", f"user{i}@example.com")
    for user_id, amount in SCENARIO_ORDERS:
        container.orders.add(user_id, amount)
    return container


@pytest.fixture
def built(scenario):
    """Scenario with the snapshot built (unique index included)."""
    scenario.summary.build()
    return scenario
