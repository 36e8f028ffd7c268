"""
Counter used to name derived tables.
"""

import itertools
import threading


class NameCounter:
    """Hands out increasing suffixes for derived table names."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        """Increment and return the next suffix."""
        with self._lock:
            return next(self._counter)

    def derive(self, base: str) -> str:
        return f"{base}{self.next()}"


# Shared by every table that is not given its own counter
default_counter = NameCounter()
