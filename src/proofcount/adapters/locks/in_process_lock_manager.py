from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict

from proofcount.ports.lock_manager import LockManager


@dataclass
class _StoreLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    # Holders plus waiters; the entry is dropped when this reaches zero.
    users: int = 0


class InProcessLockManager(LockManager):
    """Serializes read-modify-write cycles per store within a single process.

    Locks exist only while some request holds or waits for them, so unknown store
    names do not accumulate in the registry.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, _StoreLock] = {}
        self._guard = threading.Lock()

    def acquire(self, store_name: str) -> None:
        with self._guard:
            entry = self._locks.get(store_name)
            if entry is None:
                entry = _StoreLock()
                self._locks[store_name] = entry
            entry.users += 1
        entry.lock.acquire()

    def release(self, store_name: str) -> None:
        with self._guard:
            entry = self._locks.get(store_name)
            if entry is None:
                raise RuntimeError(f"Lock for store {store_name} is not held")
            entry.users -= 1
            if entry.users == 0:
                del self._locks[store_name]
            entry.lock.release()
