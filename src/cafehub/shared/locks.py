"""Per-key mutual exclusion for read-compute-write sequences."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """A family of locks, one per key, created on first use.

    Lock objects are reference counted and dropped once no thread holds or
    waits on them, so the registry stays as small as the set of keys in use.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1

        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
