"""Indicator names and the per-date indicator index."""

from signal_engine.indicators import names
from signal_engine.indicators.index import (
    IndicatorIndex,
    IndicatorValues,
    build_close_lookup,
    build_indicator_index,
    sorted_dates,
)

__all__ = [
    "names",
    "IndicatorIndex",
    "IndicatorValues",
    "build_close_lookup",
    "build_indicator_index",
    "sorted_dates",
]
