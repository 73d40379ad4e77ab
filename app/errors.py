"""Summary errors - surfaced directly to callers, never retried internally."""


class SummaryError(Exception):
    """Base error for summary snapshot operations."""

    def __init__(self, message: str = "Summary snapshot error"):
        self.message = message
        super().__init__(self.message)


class BuildError(SummaryError):
    """Aggregation query could not run (missing source relation, incompatible types)."""

    def __init__(self, message: str = "Summary build failed"):
        super().__init__(message)


class RefreshError(SummaryError):
    """Recomputation cannot proceed in the requested mode."""

    def __init__(self, message: str = "Summary refresh failed"):
        super().__init__(message)


class ReadError(SummaryError):
    """Snapshot was never built (or has been dropped)."""

    def __init__(self, message: str = "Summary snapshot has not been built"):
        super().__init__(message)
