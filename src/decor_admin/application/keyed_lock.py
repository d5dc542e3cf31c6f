"""Per-key mutual exclusion for order transitions."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from threading import Lock, RLock


class KeyedLock:
    """Hands out one re-entrant lock per key.

    Two transitions on the same order serialise; transitions on
    different orders proceed independently.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[Hashable, RLock] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, RLock())
        with lock:
            yield
