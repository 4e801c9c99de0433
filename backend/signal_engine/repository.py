"""Collaborator protocols for data access and persistence.

The engine never calls these itself; outer layers (scanner/, or any
other storage backend) implement them and move records in and out.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from signal_engine.models.market import DailyPrice, TechnicalIndicator
from signal_engine.models.signal import ConfluenceSignal, Signal


@runtime_checkable
class PriceRepository(Protocol):
    """Supplies date-ascending, date-unique daily bars per symbol."""

    async def get_prices(self, symbol: str) -> list[DailyPrice]:
        ...


@runtime_checkable
class IndicatorRepository(Protocol):
    """Supplies (date, name, value) records per symbol, in stored order."""

    async def get_indicators(self, symbol: str) -> list[TechnicalIndicator]:
        ...


@runtime_checkable
class SignalSink(Protocol):
    """Persists engine output.

    Implementations assign id and created_at on insert and must not
    change any other field, except the acknowledged flag they own.
    """

    async def save_signal(self, signal: Signal) -> Signal:
        """Persist a signal and return the stored copy."""
        ...

    async def save_confluence(self, confluence: ConfluenceSignal) -> ConfluenceSignal:
        """Persist a confluence signal and return the stored copy."""
        ...

    async def acknowledge(self, signal_id: int) -> bool:
        """Mark a signal as acknowledged. Returns False if unknown."""
        ...
