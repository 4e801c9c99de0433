"""Single-indicator threshold crossing detectors: RSI, ADX, Williams %R, CCI, MFI.

A signal fires on the date the value moves past a threshold. A missing
previous value counts as "not past the threshold", so the first extreme
value of a series fires too.
"""

from __future__ import annotations

from dataclasses import dataclass

from signal_engine.detectors.base import DetectionContext
from signal_engine.detectors.registry import DetectorKind, register_detector
from signal_engine.indicators import names
from signal_engine.models.config import SignalConfig
from signal_engine.models.signal import Signal, SignalDirection, SignalType


@dataclass(frozen=True)
class ThresholdRule:
    """How one oscillator maps threshold crossings to signals.

    Strength is the distance past the threshold divided by a fixed scale,
    independent of the configured threshold values.
    """

    indicator: str
    upper_type: SignalType
    upper_direction: SignalDirection
    upper_scale: float
    lower_type: SignalType
    lower_direction: SignalDirection
    lower_scale: float


RSI_RULE = ThresholdRule(
    indicator=names.RSI,
    upper_type=SignalType.RSI_OVERBOUGHT,
    upper_direction=SignalDirection.BEARISH,
    upper_scale=30.0,
    lower_type=SignalType.RSI_OVERSOLD,
    lower_direction=SignalDirection.BULLISH,
    lower_scale=30.0,
)

ADX_RULE = ThresholdRule(
    indicator=names.ADX,
    upper_type=SignalType.ADX_TREND_STRONG,
    upper_direction=SignalDirection.NEUTRAL,
    upper_scale=25.0,
    lower_type=SignalType.ADX_TREND_WEAK,
    lower_direction=SignalDirection.NEUTRAL,
    lower_scale=20.0,
)

WILLR_RULE = ThresholdRule(
    indicator=names.WILLR,
    upper_type=SignalType.WILLR_OVERBOUGHT,
    upper_direction=SignalDirection.BEARISH,
    upper_scale=20.0,
    lower_type=SignalType.WILLR_OVERSOLD,
    lower_direction=SignalDirection.BULLISH,
    lower_scale=20.0,
)

CCI_RULE = ThresholdRule(
    indicator=names.CCI,
    upper_type=SignalType.CCI_OVERBOUGHT,
    upper_direction=SignalDirection.BEARISH,
    upper_scale=100.0,
    lower_type=SignalType.CCI_OVERSOLD,
    lower_direction=SignalDirection.BULLISH,
    lower_scale=100.0,
)

MFI_RULE = ThresholdRule(
    indicator=names.MFI,
    upper_type=SignalType.MFI_OVERBOUGHT,
    upper_direction=SignalDirection.BEARISH,
    upper_scale=20.0,
    lower_type=SignalType.MFI_OVERSOLD,
    lower_direction=SignalDirection.BULLISH,
    lower_scale=20.0,
)


def detect_threshold_cross(
    ctx: DetectionContext,
    rule: ThresholdRule,
    upper: float,
    lower: float,
) -> Signal | None:
    """Detect a move above `upper` or below `lower` since the previous date.

    Args:
        ctx: Detection context for the date.
        rule: Indicator name, signal kinds and strength scales.
        upper: Threshold the value must rise above.
        lower: Threshold the value must fall below.

    Returns:
        Signal on the crossing date, None otherwise.
    """
    value = ctx.get(rule.indicator)
    if value is None:
        return None
    prev = ctx.get_prev(rule.indicator)

    if value > upper:
        if prev is None or prev <= upper:
            return ctx.emit(
                rule.upper_type,
                rule.upper_direction,
                (value - upper) / rule.upper_scale,
                rule.indicator,
                value,
            )
    elif value < lower:
        if prev is None or prev >= lower:
            return ctx.emit(
                rule.lower_type,
                rule.lower_direction,
                (lower - value) / rule.lower_scale,
                rule.indicator,
                value,
            )

    return None


@register_detector(DetectorKind.RSI)
def detect_rsi(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    """RSI crossing into overbought (bearish) or oversold (bullish)."""
    return detect_threshold_cross(ctx, RSI_RULE, config.rsi_overbought, config.rsi_oversold)


@register_detector(DetectorKind.ADX)
def detect_adx(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    """ADX trend strengthening or weakening; direction is always neutral."""
    return detect_threshold_cross(ctx, ADX_RULE, config.adx_strong_trend, config.adx_weak_trend)


@register_detector(DetectorKind.WILLR)
def detect_willr(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    return detect_threshold_cross(ctx, WILLR_RULE, config.willr_overbought, config.willr_oversold)


@register_detector(DetectorKind.CCI)
def detect_cci(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    return detect_threshold_cross(ctx, CCI_RULE, config.cci_overbought, config.cci_oversold)


@register_detector(DetectorKind.MFI)
def detect_mfi(ctx: DetectionContext, config: SignalConfig) -> Signal | None:
    return detect_threshold_cross(ctx, MFI_RULE, config.mfi_overbought, config.mfi_oversold)
