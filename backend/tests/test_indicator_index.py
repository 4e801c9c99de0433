"""Tests for the per-date indicator index."""

from datetime import date

from signal_engine.indicators import build_close_lookup, build_indicator_index, sorted_dates
from signal_engine.models import DailyPrice, TechnicalIndicator


def _ind(day: int, name: str, value: float) -> TechnicalIndicator:
    return TechnicalIndicator(
        symbol="AAPL", date=date(2026, 1, day), indicator_name=name, value=value
    )


class TestBuildIndicatorIndex:
    """Tests for build_indicator_index."""

    def test_groups_by_date_then_name(self):
        index = build_indicator_index([
            _ind(1, "RSI_14", 55.0),
            _ind(1, "ADX_14", 21.0),
            _ind(2, "RSI_14", 60.0),
        ])

        assert index == {
            date(2026, 1, 1): {"RSI_14": 55.0, "ADX_14": 21.0},
            date(2026, 1, 2): {"RSI_14": 60.0},
        }

    def test_duplicate_last_write_wins(self):
        index = build_indicator_index([
            _ind(1, "RSI_14", 50.0),
            _ind(1, "RSI_14", 75.0),
        ])
        assert index[date(2026, 1, 1)]["RSI_14"] == 75.0

        index = build_indicator_index([
            _ind(1, "RSI_14", 75.0),
            _ind(1, "RSI_14", 50.0),
        ])
        assert index[date(2026, 1, 1)]["RSI_14"] == 50.0

    def test_dates_keep_first_seen_order(self):
        index = build_indicator_index([
            _ind(3, "RSI_14", 1.0),
            _ind(1, "RSI_14", 2.0),
            _ind(2, "RSI_14", 3.0),
            _ind(3, "ADX_14", 4.0),
        ])

        assert list(index) == [date(2026, 1, 3), date(2026, 1, 1), date(2026, 1, 2)]
        assert sorted_dates(index) == [date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 3)]

    def test_empty_input(self):
        assert build_indicator_index([]) == {}


class TestCloseLookup:
    """Tests for build_close_lookup."""

    def test_maps_date_to_close(self):
        prices = [
            DailyPrice(symbol="AAPL", date=date(2026, 1, 1), open=1, high=2, low=0.5, close=1.5),
            DailyPrice(symbol="AAPL", date=date(2026, 1, 2), open=1.5, high=3, low=1, close=2.5),
        ]
        assert build_close_lookup(prices) == {
            date(2026, 1, 1): 1.5,
            date(2026, 1, 2): 2.5,
        }
