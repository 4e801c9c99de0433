"""Bollinger Band breakout detector.

A level test: price is compared with the bands on the date alone, with
no look-back, so a sustained breach fires on every date it persists.
"""

from __future__ import annotations

from signal_engine.detectors.base import DetectionContext
from signal_engine.detectors.registry import DetectorKind, register_detector
from signal_engine.indicators import names
from signal_engine.models.config import SignalConfig
from signal_engine.models.signal import Signal, SignalDirection, SignalType

# Floor for the half-band width used as the strength denominator
MIN_HALF_WIDTH = 0.01


@register_detector(DetectorKind.BOLLINGER)
def detect_bollinger(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    """Price above the upper band (bearish) or below the lower band (bullish)."""
    bands = ctx.values(names.BB_UPPER, names.BB_LOWER, names.BB_MIDDLE)
    if bands is None:
        return None

    upper, lower, middle = bands
    price = ctx.price

    if price > upper:
        return ctx.emit(
            SignalType.BOLLINGER_UPPER_BREAK,
            SignalDirection.BEARISH,
            (price - upper) / max(upper - middle, MIN_HALF_WIDTH),
            names.BB_UPPER,
            upper,
        )
    if price < lower:
        return ctx.emit(
            SignalType.BOLLINGER_LOWER_BREAK,
            SignalDirection.BULLISH,
            (lower - price) / max(middle - lower, MIN_HALF_WIDTH),
            names.BB_LOWER,
            lower,
        )
    return None
