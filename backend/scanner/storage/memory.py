"""In-memory signal store.

Implements the SignalSink protocol for batch scans and tests. Ids are
sequential per store; created_at is a UTC ISO-8601 timestamp.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable

from signal_engine.models.signal import ConfluenceSignal, Signal, SignalType

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySignalStore:
    """Stores signals and confluence events keyed by their natural keys.

    Saving a record whose key already exists replaces its semantic fields
    but keeps the stored id, created_at and acknowledged flag.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or _utc_now
        self._signals: dict[tuple[str, SignalType, date], Signal] = {}
        self._confluence: dict[tuple[str, date], ConfluenceSignal] = {}
        self._next_signal_id = 1
        self._next_confluence_id = 1

    def _timestamp(self) -> str:
        return self._clock().isoformat()

    # ── SignalSink ──────────────────────────────────────────────

    async def save_signal(self, signal: Signal) -> Signal:
        existing = self._signals.get(signal.key)
        if existing is not None:
            stored = signal.model_copy(
                update={
                    "id": existing.id,
                    "created_at": existing.created_at,
                    "acknowledged": existing.acknowledged,
                }
            )
        else:
            stored = signal.model_copy(
                update={
                    "id": self._next_signal_id,
                    "created_at": self._timestamp(),
                    "acknowledged": False,
                }
            )
            self._next_signal_id += 1
        self._signals[signal.key] = stored
        return stored

    async def save_confluence(self, confluence: ConfluenceSignal) -> ConfluenceSignal:
        existing = self._confluence.get(confluence.key)
        if existing is not None:
            stored = confluence.model_copy(
                update={"id": existing.id, "created_at": existing.created_at}
            )
        else:
            stored = confluence.model_copy(
                update={"id": self._next_confluence_id, "created_at": self._timestamp()}
            )
            self._next_confluence_id += 1
        self._confluence[confluence.key] = stored
        return stored

    async def acknowledge(self, signal_id: int) -> bool:
        for key, signal in self._signals.items():
            if signal.id == signal_id:
                if not signal.acknowledged:
                    self._signals[key] = signal.model_copy(update={"acknowledged": True})
                    logger.debug("Acknowledged signal %d", signal_id)
                return True
        return False

    # ── Queries ─────────────────────────────────────────────────

    async def get_signals(
        self,
        symbol: str | None = None,
        unacknowledged_only: bool = False,
    ) -> list[Signal]:
        """Signals ordered by date, then id."""
        signals = [
            s
            for s in self._signals.values()
            if (symbol is None or s.symbol == symbol)
            and not (unacknowledged_only and s.acknowledged)
        ]
        return sorted(signals, key=lambda s: (s.timestamp, s.id))

    async def get_confluence(self, symbol: str | None = None) -> list[ConfluenceSignal]:
        """Confluence events ordered by date."""
        events = [
            c for c in self._confluence.values() if symbol is None or c.symbol == symbol
        ]
        return sorted(events, key=lambda c: c.date)

    async def get_by_id(self, signal_id: int) -> Signal | None:
        for signal in self._signals.values():
            if signal.id == signal_id:
                return signal
        return None

    def __len__(self) -> int:
        return len(self._signals)

    def __bool__(self) -> bool:
        # An empty store is still a usable sink
        return True
