"""ETL package - synthetic data, snapshot validation, read-path benchmarks."""

from etl.benchmark import compare_read_paths, explain
from etl.generate import add_order, seed
from etl.validation import validate_snapshot

__all__ = [
    "seed",
    "add_order",
    "validate_snapshot",
    "compare_read_paths",
    "explain",
]
