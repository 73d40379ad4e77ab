"""Read/write gate for the summary snapshot.

DuckDB only offers MVCC, with no way for a writer to keep readers out of a
table, so exclusive refreshes take this gate instead.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteGate:
    """Many concurrent readers or one writer; waiting writers go first."""

    def __init__(self):
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def shared(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()

    @property
    def readers(self) -> int:
        with self._cond:
            return self._readers

    @property
    def locked(self) -> bool:
        """True while a writer holds the gate."""
        with self._cond:
            return self._writer
