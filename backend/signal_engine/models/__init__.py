"""Value types and configuration for the signal engine."""

from signal_engine.models.config import ConfluenceConfig, SignalConfig
from signal_engine.models.market import DailyPrice, TechnicalIndicator
from signal_engine.models.signal import (
    ConfluenceSignal,
    IndicatorVote,
    Signal,
    SignalDirection,
    SignalType,
    clamp_strength,
)

__all__ = [
    "ConfluenceConfig",
    "SignalConfig",
    "DailyPrice",
    "TechnicalIndicator",
    "ConfluenceSignal",
    "IndicatorVote",
    "Signal",
    "SignalDirection",
    "SignalType",
    "clamp_strength",
]
