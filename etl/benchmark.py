"""Read-path benchmark - direct aggregation vs. plain view vs. materialized snapshot."""

import statistics
import time
from collections.abc import Callable

from loguru import logger

from app.container import Container
from app.models.summary import LIVE_VIEW, SNAPSHOT_TABLE, SUMMARY_SELECT
from settings import BENCH_REPEAT


def _time(fn: Callable[[], list], repeat: int) -> dict:
    timings = []
    rows = 0
    for _ in range(repeat):
        start = time.perf_counter()
        rows = len(fn())
        timings.append((time.perf_counter() - start) * 1000)
    return {
        "rows": rows,
        "best_ms": round(min(timings), 3),
        "mean_ms": round(statistics.fmean(timings), 3),
    }


def _read_paths(container: Container) -> dict[str, Callable[[], list]]:
    if not container.live_view.view_exists():
        container.live_view.create_view()
    return {
        "direct": container.live_view.aggregate,
        "view": container.live_view.fetch_all,
        "snapshot": container.summary.query,
    }


def compare_read_paths(container: Container, repeat: int = BENCH_REPEAT) -> dict[str, dict]:
    """Time a full read of the summary through each path.

    The snapshot must already be built. Direct and view reads aggregate on
    every call; the snapshot read is a plain scan.
    """
    if repeat < 1:
        raise ValueError("repeat must be at least 1")

    results = {name: _time(fn, repeat) for name, fn in _read_paths(container).items()}
    for name, r in results.items():
        logger.info("{:<9} {:>9,} rows  best {:>9.3f} ms  mean {:>9.3f} ms", name, r["rows"], r["best_ms"], r["mean_ms"])
    return results


def explain(container: Container) -> dict[str, str]:
    """EXPLAIN ANALYZE output for each read path."""
    if not container.live_view.view_exists():
        container.live_view.create_view()
    queries = {
        "direct": SUMMARY_SELECT,
        "view": f"SELECT * FROM {LIVE_VIEW}",
        "snapshot": f"SELECT * FROM {SNAPSHOT_TABLE}",
    }
    plans = {}
    for name, sql in queries.items():
        rows = container.db.cursor().execute(f"EXPLAIN ANALYZE {sql}").fetchall()
        plans[name] = "\n".join(str(r[-1]) for r in rows)
    return plans
