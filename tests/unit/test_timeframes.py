import pytest

from proofcount.domain.stores import timeframes


@pytest.mark.parametrize(
    "timeframe,expected_ms",
    [
        ("1hr", 3_600_000),
        ("1day", 86_400_000),
        ("1week", 604_800_000),
        ("alltime", 2**53 - 1),
    ],
)
def test_window_ms(timeframe, expected_ms):
    assert timeframes.window_ms(timeframe) == expected_ms


@pytest.mark.parametrize(
    "timeframe,expected_label",
    [("1hr", "hour"), ("1day", "24 hours"), ("1week", "7 days"), ("alltime", "")],
)
def test_label(timeframe, expected_label):
    assert timeframes.label(timeframe) == expected_label


def test_only_enumerated_timeframes_are_valid():
    for tf in timeframes.TIMEFRAMES:
        assert timeframes.is_valid_timeframe(tf)
    assert not timeframes.is_valid_timeframe("1month")
    assert not timeframes.is_valid_timeframe("")
    assert not timeframes.is_valid_timeframe("1HR")
