"""Per-date indicator lookup built from flat indicator records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date

from signal_engine.models.market import DailyPrice, TechnicalIndicator

# indicator name -> value for a single date
IndicatorValues = Mapping[str, float]

# date -> indicator values, in first-seen date order
IndicatorIndex = dict[date, dict[str, float]]


def build_indicator_index(indicators: Iterable[TechnicalIndicator]) -> IndicatorIndex:
    """Group indicator records by date, then by name.

    Duplicate (date, name) pairs resolve last-write-wins in input order.
    Dates keep the order in which they first appear; callers that need
    chronological order must sort the keys themselves.
    """
    index: IndicatorIndex = {}
    for ind in indicators:
        index.setdefault(ind.date, {})[ind.indicator_name] = ind.value
    return index


def sorted_dates(index: IndicatorIndex) -> list[date]:
    """Return the distinct dates of an index in ascending order."""
    return sorted(index)


def build_close_lookup(prices: Iterable[DailyPrice]) -> dict[date, float]:
    """Map each bar's date to its closing price (later bars win)."""
    return {price.date: price.close for price in prices}
