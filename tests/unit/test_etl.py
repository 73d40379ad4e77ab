"""Tests for synthetic data, validation and benchmarks."""

from decimal import Decimal

import numpy as np
import pytest

from app.container import Container
from app.repositories.db import connect
from etl import add_order, compare_read_paths, explain, seed, validate_snapshot
from etl.generate import orders_frame, users_frame


class TestGenerate:
    def test_users_frame(self):
        df = users_frame(3, start=5)
        assert df["name"].to_list() == ["User 5", "User 6", "User 7"]
        assert df["email"][0] == "user5@example.com"

    def test_orders_frame_bounds(self):
        rng = np.random.default_rng(0)
        df = orders_frame(500, np.array([2, 4, 6]), rng)
        assert df.height == 500
        assert set(df["user_id"].to_list()) <= {2, 4, 6}
        assert df["amount"].min() >= 0
        assert df["amount"].max() <= 1000

    def test_seed_counts(self, container):
        result = seed(container, users=25, orders=120, rng_seed=1)
        assert container.users.count() == 25
        assert container.orders.count() == 120
        assert (result["first_user_id"], result["last_user_id"]) == (1, 25)

    def test_seed_appends(self, container):
        seed(container, users=10, orders=10, rng_seed=1)
        result = seed(container, users=5, orders=20, rng_seed=1)
        assert result["first_user_id"] == 11
        user_ids = {r[0] for r in container.orders.fetchall("SELECT user_id FROM orders WHERE id > 10")}
        assert user_ids <= set(range(11, 16))

    def test_seed_amounts_have_cents(self, container):
        seed(container, users=5, orders=50, rng_seed=2)
        amounts = [r[0] for r in container.orders.fetchall("SELECT amount FROM orders")]
        assert all(isinstance(a, Decimal) and a == a.quantize(Decimal("0.01")) for a in amounts)

    def test_seed_deterministic(self):
        totals = []
        for _ in range(2):
            c = Container(connect(":memory:"))
            seed(c, users=10, orders=40, rng_seed=42)
            totals.append(c.orders.fetchall("SELECT user_id, amount FROM orders ORDER BY id"))
            c.close()
        assert totals[0] == totals[1]

    def test_orders_need_users(self, container):
        with pytest.raises(ValueError):
            seed(container, users=0, orders=5)

    def test_add_order(self, scenario):
        order_id = add_order(scenario, 2, "4.50")
        assert order_id == 6
        assert scenario.orders.for_user(2)[-1]["amount"] == Decimal("4.50")


class TestValidation:
    def test_fresh_snapshot_valid(self, built):
        result = validate_snapshot(built)
        assert result["valid"] is True
        assert result["stale"] is False
        assert result["stats"]["snapshot_rows"] == 3

    def test_stale_snapshot_reported(self, built):
        add_order(built, 1, "9999.99")
        user_id = built.users.add("User 4", "user4@example.com")
        add_order(built, user_id, "1.00")

        result = validate_snapshot(built)
        assert result["valid"] is False
        assert result["stale"] is True
        assert result["stats"]["mismatched"] == 1
        assert result["stats"]["missing"] == 1

    def test_not_built(self, scenario):
        result = validate_snapshot(scenario)
        assert result["valid"] is False
        assert result["issues"]


class TestLiveView:
    def test_view_always_fresh(self, built):
        built.live_view.create_view()
        add_order(built, 1, "9999.99")
        assert built.live_view.fetch_one(1).total_spent == Decimal("10029.99")
        assert built.summary.get(1).total_spent == Decimal("30.00")

    def test_view_matches_direct(self, built):
        built.live_view.create_view()
        assert built.live_view.fetch_all() == built.live_view.aggregate()


class TestBenchmark:
    def test_compare_read_paths(self, built):
        results = compare_read_paths(built, repeat=2)
        assert set(results) == {"direct", "view", "snapshot"}
        assert all(r["rows"] == 3 for r in results.values())
        assert all(r["best_ms"] <= r["mean_ms"] for r in results.values())

    def test_repeat_must_be_positive(self, built):
        with pytest.raises(ValueError):
            compare_read_paths(built, repeat=0)

    def test_explain(self, built):
        plans = explain(built)
        assert set(plans) == {"direct", "view", "snapshot"}
        assert all(plans.values())
