#!/usr/bin/env python3
"""
Plain view vs. materialized summary over synthetic users and orders.

Usage:
    python demo.py                      # Full walkthrough on the configured DB
    python demo.py seed [USERS ORDERS]  # Insert synthetic users and orders
    python demo.py build [--no-index]   # Build the snapshot (unique index by default)
    python demo.py index                # Add the unique index to an existing snapshot
    python demo.py refresh              # Refresh, blocking readers
    python demo.py refresh --concurrently   # Refresh without blocking readers
    python demo.py order USER AMOUNT    # Insert one order
    python demo.py show USER            # Snapshot row vs. live view row for a user
    python demo.py status               # Snapshot status and staleness
    python demo.py --validate           # Compare snapshot with live aggregation
    python demo.py bench [--explain]    # Time direct / view / snapshot reads
    python demo.py drop                 # Drop the snapshot
"""

import sys

from app.container import Container, open_container
from app.errors import SummaryError
from app.models.summary import RefreshMode
from etl import add_order, compare_read_paths, explain, seed, validate_snapshot
from settings import DB_PATH, SEED_ORDERS, SEED_USERS
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


def run_validation(container: Container) -> bool:
    """Print a validation report for the snapshot."""
    result = validate_snapshot(container)

    print("\n" + "=" * 60)
    print("SNAPSHOT VALIDATION REPORT")
    print("=" * 60)
    for key, value in result["stats"].items():
        print(f"  {key}: {value:,}")
    print(f"  stale: {result['stale']}")
    for issue in result["issues"]:
        print(f"  ⚠️  {issue}")
    print("=" * 60)
    if result["valid"]:
        print("✅ Snapshot matches sources")
    elif result["stale"]:
        print("❌ Snapshot is stale. Run 'python demo.py refresh'.")
    else:
        print("❌ Snapshot differs from sources")
    print("=" * 60 + "\n")
    return result["valid"]


def show_user(container: Container, user_id: int) -> None:
    snapshot_row = container.summary.get(user_id)
    live_row = container.live_view.fetch_one(user_id) if container.live_view.view_exists() else None
    print(f"snapshot: {snapshot_row}")
    print(f"view:     {live_row}")


def print_status(container: Container) -> None:
    status = container.summary.status()
    print(f"built:        {status.built}")
    print(f"unique index: {status.has_unique_index}")
    print(f"rows:         {status.row_count:,}")
    print(f"stale:        {status.stale}")
    if status.last_refresh:
        r = status.last_refresh
        print(f"last refresh: generation {r.generation} ({r.mode}) at {r.refreshed_at:%Y-%m-%d %H:%M:%S}, {r.duration_ms:.1f} ms")


def walkthrough(container: Container) -> None:
    """The tutorial end to end: seed, view, snapshot, refresh, new order, refresh."""
    if container.users.count() == 0:
        seed(container)
    else:
        logger.info("Sources already seeded ({:,} users)", container.users.count())

    container.live_view.create_view()
    container.summary.build(unique_index=False)
    container.summary.ensure_unique_index()
    container.summary.refresh(RefreshMode.EXCLUSIVE)
    container.summary.refresh(RefreshMode.NON_BLOCKING)

    user_id = container.users.count()
    add_order(container, user_id, "9999.99")
    logger.info("After insert, stale={}", container.summary.is_stale())
    show_user(container, user_id)

    container.summary.refresh(RefreshMode.EXCLUSIVE)
    logger.info("After refresh, stale={}", container.summary.is_stale())
    show_user(container, user_id)

    compare_read_paths(container)


def main():
    args = sys.argv[1:]
    flags = {a for a in args if a.startswith("--")}
    args = [a for a in args if not a.startswith("--")]

    logger.info("Database: {}", DB_PATH)
    with open_container(DB_PATH) as container:
        try:
            if "--validate" in flags or args == ["validate"]:
                ok = run_validation(container)
                sys.exit(0 if ok else 1)

            if not args:
                walkthrough(container)
                return

            command, rest = args[0], args[1:]
            if command == "seed":
                users = int(rest[0]) if rest else SEED_USERS
                orders = int(rest[1]) if len(rest) > 1 else SEED_ORDERS
                seed(container, users, orders)
            elif command == "build":
                container.summary.build(unique_index="--no-index" not in flags)
            elif command == "index":
                container.summary.ensure_unique_index()
            elif command == "refresh":
                mode = RefreshMode.NON_BLOCKING if "--concurrently" in flags else RefreshMode.EXCLUSIVE
                container.summary.refresh(mode)
            elif command == "order" and len(rest) == 2:
                add_order(container, int(rest[0]), rest[1])
            elif command == "show" and rest:
                show_user(container, int(rest[0]))
            elif command == "status":
                print_status(container)
            elif command == "bench":
                compare_read_paths(container)
                if "--explain" in flags:
                    for name, plan in explain(container).items():
                        print(f"\n--- {name} ---\n{plan}")
            elif command == "drop":
                container.summary.drop()
            else:
                print(__doc__)
                sys.exit(1)
        except SummaryError as e:
            logger.error("{}: {}", e.__class__.__name__, e.message)
            sys.exit(2)


if __name__ == "__main__":
    main()
