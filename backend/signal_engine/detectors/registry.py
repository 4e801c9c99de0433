"""Detector registry keyed by a closed set of detector kinds.

Usage:
    @register_detector(DetectorKind.RSI)
    def detect_rsi(ctx, config):
        ...

    signals = run_detectors(ctx, config)
"""

from __future__ import annotations

import logging
from enum import Enum

from signal_engine.detectors.base import DetectionContext, DetectorFn
from signal_engine.models.config import SignalConfig
from signal_engine.models.signal import Signal

logger = logging.getLogger(__name__)


class DetectorKind(str, Enum):
    """The nine single-indicator detectors, in evaluation order."""

    RSI = "rsi"
    MACD = "macd"
    BOLLINGER = "bollinger"
    MA_CROSSOVER = "ma_crossover"
    ADX = "adx"
    STOCHASTIC = "stochastic"
    WILLR = "willr"
    CCI = "cci"
    MFI = "mfi"


# kind -> pure evaluation function
_REGISTRY: dict[DetectorKind, DetectorFn] = {}


def register_detector(kind: DetectorKind):
    """Decorator to register a detector function for a kind.

    Raises:
        ValueError: If the kind already has a detector.
    """

    def decorator(fn: DetectorFn) -> DetectorFn:
        if kind in _REGISTRY:
            raise ValueError(
                f"Detector '{kind.value}' is already registered by {_REGISTRY[kind].__name__}"
            )
        _REGISTRY[kind] = fn
        logger.debug("Registered detector: %s -> %s", kind.value, fn.__name__)
        return fn

    return decorator


def get_detector(kind: DetectorKind) -> DetectorFn:
    """Get the detector function for a kind.

    Raises:
        KeyError: If nothing is registered for the kind.
    """
    fn = _REGISTRY.get(kind)
    if fn is None:
        raise KeyError(f"No detector registered for '{kind.value}'")
    return fn


def detector_order() -> list[DetectorKind]:
    """Return detector kinds in their fixed evaluation order."""
    return list(DetectorKind)


def run_detectors(ctx: DetectionContext, config: SignalConfig) -> list[Signal]:
    """Evaluate every detector against one date, in fixed order.

    Each detector yields at most one signal; abstentions are skipped.
    """
    signals: list[Signal] = []
    for kind in DetectorKind:
        signal = get_detector(kind)(ctx, config)
        if signal is not None:
            signals.append(signal)
    return signals
