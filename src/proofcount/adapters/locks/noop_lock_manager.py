from __future__ import annotations

from proofcount.ports.lock_manager import LockManager


class NoopLockManager(LockManager):
    def acquire(self, store_name: str) -> None:
        return None

    def release(self, store_name: str) -> None:
        return None
