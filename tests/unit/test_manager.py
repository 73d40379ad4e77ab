"""Tests for the aggregate cache manager."""

from collections import defaultdict
from decimal import Decimal

import duckdb
import pytest

from app.errors import BuildError, ReadError, RefreshError
from app.models.summary import RefreshMode, UserOrderSummary
from etl import seed


def totals(rows: list[UserOrderSummary]) -> dict[int, tuple[int, Decimal]]:
    return {r.user_id: (r.total_orders, r.total_spent) for r in rows}


class TestBuild:
    def test_scenario_rows(self, built):
        assert totals(built.summary.query()) == {
            1: (2, Decimal("30.00")),
            2: (1, Decimal("10.00")),
            3: (2, Decimal("25.00")),
        }

    def test_names_carried(self, built):
        assert built.summary.get(2).name == "User 2"

    def test_users_without_orders_excluded(self, scenario):
        scenario.users.add("User 4", "user4@example.com")
        scenario.summary.build()
        assert scenario.summary.get(4) is None
        assert len(scenario.summary.query()) == 3

    def test_exact_aggregation_on_seeded_data(self, container):
        seed(container, users=40, orders=300, rng_seed=11)
        container.summary.build()

        expected: dict[int, list] = defaultdict(lambda: [0, Decimal("0")])
        for user_id, amount in container.orders.fetchall("SELECT user_id, amount FROM orders"):
            expected[user_id][0] += 1
            expected[user_id][1] += amount

        assert totals(container.summary.query()) == {k: (v[0], v[1]) for k, v in expected.items()}

    def test_unique_index_created(self, built):
        assert built.snapshot.has_unique_index()

    def test_without_unique_index(self, scenario):
        scenario.summary.build(unique_index=False)
        assert not scenario.snapshot.has_unique_index()

    def test_rebuild_replaces(self, built):
        built.orders.add(2, "5.00")
        built.summary.build()
        assert built.summary.get(2).total_spent == Decimal("15.00")

    def test_record(self, built):
        record = built.refresh_log.latest()
        assert record.generation == 1
        assert record.mode == "build"
        assert record.row_count == 3
        assert record.watermark.orders_count == 5

    def test_missing_source_raises(self, container):
        container.db.cursor().execute("DROP TABLE orders")
        with pytest.raises(BuildError):
            container.summary.build()
        assert container.summary.status().built is False


class TestQuery:
    def test_predicate(self, built):
        rows = built.summary.query(lambda r: r.total_spent > Decimal("20"))
        assert [r.user_id for r in rows] == [1, 3]

    def test_ordered_by_user(self, built):
        assert [r.user_id for r in built.summary.query()] == [1, 2, 3]

    def test_get_unknown(self, built):
        assert built.summary.get(999) is None

    def test_before_build(self, scenario):
        with pytest.raises(ReadError):
            scenario.summary.query()
        with pytest.raises(ReadError):
            scenario.summary.get(1)


class TestRefresh:
    @pytest.mark.parametrize("mode", [RefreshMode.EXCLUSIVE, RefreshMode.NON_BLOCKING])
    def test_freshness_gap(self, built, mode):
        built.orders.add(1, "9999.99")

        assert built.summary.get(1).total_spent == Decimal("30.00")
        assert built.summary.is_stale() is True

        built.summary.refresh(mode)

        row = built.summary.get(1)
        assert row.total_spent == Decimal("10029.99")
        assert row.total_orders == 3
        assert built.summary.is_stale() is False

    @pytest.mark.parametrize("mode", [RefreshMode.EXCLUSIVE, RefreshMode.NON_BLOCKING])
    def test_idempotent(self, built, mode):
        built.summary.refresh(mode)
        first = [r.to_dict() for r in built.summary.query()]
        built.summary.refresh(mode)
        second = [r.to_dict() for r in built.summary.query()]
        assert first == second

    def test_mode_from_string(self, built):
        record = built.summary.refresh("non_blocking")
        assert record.mode == "non_blocking"

    def test_non_blocking_picks_up_new_users(self, built):
        user_id = built.users.add("User 4", "user4@example.com")
        built.orders.add(user_id, "1.25")
        record = built.summary.refresh(RefreshMode.NON_BLOCKING)
        assert record.row_count == 4
        assert built.summary.get(user_id).total_spent == Decimal("1.25")

    def test_non_blocking_requires_unique_index(self, scenario):
        scenario.summary.build(unique_index=False)
        scenario.orders.add(1, "9999.99")

        with pytest.raises(RefreshError, match="uniqueness"):
            scenario.summary.refresh(RefreshMode.NON_BLOCKING)
        assert scenario.summary.get(1).total_spent == Decimal("30.00")

        scenario.summary.ensure_unique_index()
        scenario.summary.refresh(RefreshMode.NON_BLOCKING)
        assert scenario.summary.get(1).total_spent == Decimal("10029.99")

    def test_exclusive_keeps_unique_index(self, built):
        built.summary.refresh(RefreshMode.EXCLUSIVE)
        assert built.snapshot.has_unique_index()

    def test_exclusive_without_index_stays_without(self, scenario):
        scenario.summary.build(unique_index=False)
        scenario.summary.refresh(RefreshMode.EXCLUSIVE)
        assert not scenario.snapshot.has_unique_index()

    def test_generations(self, built):
        built.summary.refresh(RefreshMode.EXCLUSIVE)
        built.summary.refresh(RefreshMode.NON_BLOCKING)
        history = built.refresh_log.history()
        assert [(r.generation, r.mode) for r in history] == [
            (3, "non_blocking"),
            (2, "exclusive"),
            (1, "build"),
        ]

    def test_before_build(self, scenario):
        with pytest.raises(RefreshError):
            scenario.summary.refresh()

    def test_invalid_mode(self, built):
        with pytest.raises(ValueError):
            built.summary.refresh("sometimes")


class TestFailureContainment:
    @pytest.mark.parametrize("mode", [RefreshMode.EXCLUSIVE, RefreshMode.NON_BLOCKING])
    def test_source_error_keeps_snapshot(self, built, mode):
        before = built.summary.query()
        built.db.cursor().execute("DROP TABLE orders")

        with pytest.raises(RefreshError):
            built.summary.refresh(mode)

        assert built.summary.query() == before
        assert built.refresh_log.latest().generation == 1

    def test_failure_after_replace_rolls_back(self, built, monkeypatch):
        built.orders.add(1, "9999.99")
        before = built.summary.query()
        original = built.snapshot.replace

        def failing_replace():
            original()
            raise duckdb.ConversionException("simulated failure")

        monkeypatch.setattr(built.snapshot, "replace", failing_replace)
        with pytest.raises(RefreshError, match="simulated failure"):
            built.summary.refresh(RefreshMode.EXCLUSIVE)

        assert built.summary.query() == before
        assert built.snapshot.has_unique_index()

    def test_failure_after_reconcile_rolls_back(self, built, monkeypatch):
        built.orders.add(3, "1.00")
        before = built.summary.query()
        original = built.snapshot.reconcile

        def failing_reconcile():
            original()
            raise duckdb.ConversionException("simulated failure")

        monkeypatch.setattr(built.snapshot, "reconcile", failing_reconcile)
        with pytest.raises(RefreshError):
            built.summary.refresh(RefreshMode.NON_BLOCKING)

        assert built.summary.query() == before

    def test_manager_usable_after_failure(self, built):
        built.summary.build(unique_index=False)
        with pytest.raises(RefreshError):
            built.summary.refresh(RefreshMode.NON_BLOCKING)
        built.summary.refresh(RefreshMode.EXCLUSIVE)


class TestStatus:
    def test_not_built(self, scenario):
        status = scenario.summary.status()
        assert status.built is False
        assert status.stale is None
        with pytest.raises(ReadError):
            scenario.summary.is_stale()

    def test_built(self, built):
        status = built.summary.status()
        assert status.built is True
        assert status.has_unique_index is True
        assert status.row_count == 3
        assert status.stale is False
        assert status.last_refresh.generation == 1

    def test_new_user_makes_stale(self, built):
        built.users.add("User 4", "user4@example.com")
        assert built.summary.is_stale() is True


class TestDrop:
    def test_drop(self, built):
        built.summary.drop()
        assert built.summary.status().built is False
        assert built.refresh_log.latest() is None
        with pytest.raises(ReadError):
            built.summary.query()

    def test_build_after_drop(self, built):
        built.summary.drop()
        record = built.summary.build()
        assert record.generation == 1
        assert len(built.summary.query()) == 3
