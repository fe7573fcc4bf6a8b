from __future__ import annotations

from typing import Protocol


class LockManager(Protocol):
    def acquire(self, store_name: str) -> None: ...

    def release(self, store_name: str) -> None: ...
