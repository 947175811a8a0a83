"""
Per-key locking for in-memory state.

Keys: user:{user_id}, partner:{slug}. One re-entrant lock per key so a
user's ledger and simulation mutations apply in order, while different users
never block each other. Locks are never held across an await.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Generator


class KeyedLock:
    """Lazily created lock per key"""

    def __init__(self):
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def _get(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: str) -> Generator[None, None, None]:
        lock = self._get(key)
        with lock:
            yield


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def partner_key(slug: str) -> str:
    return f"partner:{slug.lower()}"
