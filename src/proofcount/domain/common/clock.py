from __future__ import annotations

import time
from typing import Callable

# Returns the current time in milliseconds since the Unix epoch.
Clock = Callable[[], int]


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000
