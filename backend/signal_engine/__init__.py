"""Indicator signal engine.

This package contains pure detection and aggregation logic with no I/O
dependencies (no database, network, or settings access). Prices and
precomputed indicator values come in, Signal and ConfluenceSignal
records come out. Persistence and data access live in scanner/.
"""

from signal_engine.engine import SignalEngine
from signal_engine.models import (
    ConfluenceConfig,
    ConfluenceSignal,
    DailyPrice,
    IndicatorVote,
    Signal,
    SignalConfig,
    SignalDirection,
    SignalType,
    TechnicalIndicator,
)

__all__ = [
    "SignalEngine",
    "ConfluenceConfig",
    "ConfluenceSignal",
    "DailyPrice",
    "IndicatorVote",
    "Signal",
    "SignalConfig",
    "SignalDirection",
    "SignalType",
    "TechnicalIndicator",
]
