"""Snapshot validation - compare the materialized summary with a live aggregation."""

from app.container import Container
from app.errors import ReadError


def validate_snapshot(container: Container) -> dict:
    """Check every snapshot row against the live aggregate."""
    issues = []
    stats = {}

    try:
        snapshot = {r.user_id: r for r in container.summary.query()}
        stale = container.summary.is_stale()
    except ReadError as e:
        return {"valid": False, "stale": None, "stats": {}, "issues": [e.message]}

    live = {r.user_id: r for r in container.live_view.aggregate()}
    stats["snapshot_rows"] = len(snapshot)
    stats["live_rows"] = len(live)

    missing = sorted(live.keys() - snapshot.keys())
    extra = sorted(snapshot.keys() - live.keys())
    stats["missing"] = len(missing)
    stats["extra"] = len(extra)
    if missing:
        issues.append(f"{len(missing)} users missing from snapshot (first: {missing[:5]})")
    if extra:
        issues.append(f"{len(extra)} users in snapshot but not in sources (first: {extra[:5]})")

    mismatched = [
        user_id
        for user_id in snapshot.keys() & live.keys()
        if (snapshot[user_id].total_orders, snapshot[user_id].total_spent)
        != (live[user_id].total_orders, live[user_id].total_spent)
    ]
    stats["mismatched"] = len(mismatched)
    if mismatched:
        issues.append(f"{len(mismatched)} users with different count/sum (first: {sorted(mismatched)[:5]})")

    return {
        "valid": len(issues) == 0,
        "stale": stale,
        "stats": stats,
        "issues": issues,
    }
