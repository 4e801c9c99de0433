"""Two-line crossover detectors: MACD, SMA 20/50, Stochastic %K/%D.

All three need both lines on the date and on the previous indexed date.
A bullish cross is prev_a <= prev_b and a > b; bearish is the mirror.
"""

from __future__ import annotations

from signal_engine.detectors.base import DetectionContext
from signal_engine.detectors.registry import DetectorKind, register_detector
from signal_engine.indicators import names
from signal_engine.models.config import SignalConfig
from signal_engine.models.signal import Signal, SignalDirection, SignalType

# Stochastic crosses count within this many points of the configured band
STOCH_BAND_MARGIN = 20.0


def _crossed_above(prev_a: float, prev_b: float, a: float, b: float) -> bool:
    return prev_a <= prev_b and a > b


def _crossed_below(prev_a: float, prev_b: float, a: float, b: float) -> bool:
    return prev_a >= prev_b and a < b


def _pct_spread(numerator: float, base: float) -> float:
    """Percentage spread; a zero base saturates."""
    if base == 0:
        return 1.0
    return numerator / base * 100.0


@register_detector(DetectorKind.MACD)
def detect_macd(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    """MACD line crossing its signal line.

    Strength is the line gap as a percentage of price, which saturates
    at 1.0 for most real prices.
    """
    current = ctx.values(names.MACD, names.MACD_SIGNAL)
    previous = ctx.prev_values(names.MACD, names.MACD_SIGNAL)
    if current is None or previous is None:
        return None

    macd, signal = current
    prev_macd, prev_signal = previous
    strength = abs(macd - signal) / max(ctx.price, 1.0) * 100.0

    if _crossed_above(prev_macd, prev_signal, macd, signal):
        return ctx.emit(
            SignalType.MACD_BULLISH_CROSS, SignalDirection.BULLISH, strength, "MACD", macd
        )
    if _crossed_below(prev_macd, prev_signal, macd, signal):
        return ctx.emit(
            SignalType.MACD_BEARISH_CROSS, SignalDirection.BEARISH, strength, "MACD", macd
        )
    return None


@register_detector(DetectorKind.MA_CROSSOVER)
def detect_ma_crossover(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    """Golden cross / death cross of SMA 20 over SMA 50."""
    current = ctx.values(names.SMA_FAST, names.SMA_SLOW)
    previous = ctx.prev_values(names.SMA_FAST, names.SMA_SLOW)
    if current is None or previous is None:
        return None

    fast, slow = current
    prev_fast, prev_slow = previous

    if _crossed_above(prev_fast, prev_slow, fast, slow):
        return ctx.emit(
            SignalType.MA_CROSSOVER_BULLISH,
            SignalDirection.BULLISH,
            _pct_spread(fast - slow, slow),
            "SMA_20/50",
            fast,
        )
    if _crossed_below(prev_fast, prev_slow, fast, slow):
        return ctx.emit(
            SignalType.MA_CROSSOVER_BEARISH,
            SignalDirection.BEARISH,
            _pct_spread(slow - fast, slow),
            "SMA_20/50",
            fast,
        )
    return None


@register_detector(DetectorKind.STOCHASTIC)
def detect_stochastic(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    """%K crossing %D near the oversold band (bullish) or overbought band (bearish)."""
    current = ctx.values(names.STOCH_K, names.STOCH_D)
    previous = ctx.prev_values(names.STOCH_K, names.STOCH_D)
    if current is None or previous is None:
        return None

    k, d = current
    prev_k, prev_d = previous
    strength = abs(d - k) / 20.0

    if _crossed_above(prev_k, prev_d, k, d) and k < config.stoch_oversold + STOCH_BAND_MARGIN:
        return ctx.emit(
            SignalType.STOCH_BULLISH_CROSS, SignalDirection.BULLISH, strength, "STOCH", k
        )
    if _crossed_below(prev_k, prev_d, k, d) and k > config.stoch_overbought - STOCH_BAND_MARGIN:
        return ctx.emit(
            SignalType.STOCH_BEARISH_CROSS, SignalDirection.BEARISH, strength, "STOCH", k
        )
    return None
