"""Shared detector plumbing: the per-date context and signal construction."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from signal_engine.indicators.index import IndicatorValues
from signal_engine.models.config import SignalConfig
from signal_engine.models.signal import (
    Signal,
    SignalDirection,
    SignalType,
    clamp_strength,
)


@dataclass(frozen=True)
class DetectionContext:
    """Everything a detector may look at for one date.

    Attributes:
        symbol: Symbol being scanned.
        date: Date under evaluation.
        price: Closing price on that date (0.0 when no bar exists).
        today: Indicator values recorded on that date.
        prev: Indicator values of the preceding indexed date, if any.
    """

    symbol: str
    date: date
    price: float
    today: IndicatorValues
    prev: IndicatorValues | None = None

    def get(self, name: str) -> float | None:
        return self.today.get(name)

    def get_prev(self, name: str) -> float | None:
        if self.prev is None:
            return None
        return self.prev.get(name)

    def values(self, *names: str) -> tuple[float, ...] | None:
        """Today's values for all names, or None if any is missing."""
        result = tuple(self.today.get(name) for name in names)
        if any(v is None for v in result):
            return None
        return result

    def prev_values(self, *names: str) -> tuple[float, ...] | None:
        """Previous values for all names, or None if any is missing."""
        if self.prev is None:
            return None
        result = tuple(self.prev.get(name) for name in names)
        if any(v is None for v in result):
            return None
        return result

    def emit(
        self,
        signal_type: SignalType,
        direction: SignalDirection,
        raw_strength: float,
        triggered_by: str,
        trigger_value: float,
    ) -> Signal:
        """Build an unpersisted Signal stamped with this context."""
        return Signal(
            symbol=self.symbol,
            signal_type=signal_type,
            direction=direction,
            strength=clamp_strength(raw_strength),
            price_at_signal=self.price,
            triggered_by=triggered_by,
            trigger_value=trigger_value,
            timestamp=self.date,
        )


DetectorFn = Callable[[DetectionContext, SignalConfig], "Signal | None"]
