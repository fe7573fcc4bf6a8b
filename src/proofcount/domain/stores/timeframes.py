from __future__ import annotations

ONE_HOUR = "1hr"
ONE_DAY = "1day"
ONE_WEEK = "1week"
ALL_TIME = "alltime"

TIMEFRAMES = (ONE_HOUR, ONE_DAY, ONE_WEEK, ALL_TIME)

# Largest integer a JSON number can hold exactly; every past view qualifies.
ALL_TIME_WINDOW_MS = 2**53 - 1

WINDOW_MS = {
    ONE_HOUR: 3_600_000,
    ONE_DAY: 86_400_000,
    ONE_WEEK: 604_800_000,
    ALL_TIME: ALL_TIME_WINDOW_MS,
}

LABELS = {
    ONE_HOUR: "hour",
    ONE_DAY: "24 hours",
    ONE_WEEK: "7 days",
    ALL_TIME: "",
}


class InvalidTimeframeError(ValueError):
    def __init__(self, timeframe: str) -> None:
        super().__init__(f"Unsupported timeframe: {timeframe!r}")
        self.timeframe = timeframe


def is_valid_timeframe(timeframe: str) -> bool:
    return timeframe in WINDOW_MS


def window_ms(timeframe: str) -> int:
    return WINDOW_MS[timeframe]


def label(timeframe: str) -> str:
    return LABELS[timeframe]
