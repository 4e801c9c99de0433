"""ScanRunner: run the signal engine over many symbols.

Pulls prices and indicators from the repositories, runs the engine,
and hands every record to the sink. A failure in one symbol's data
access or persistence is logged and recorded; the scan moves on.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone

from signal_engine.engine import SignalEngine
from signal_engine.models.signal import ConfluenceSignal, Signal, SignalDirection
from signal_engine.repository import IndicatorRepository, PriceRepository, SignalSink

logger = logging.getLogger(__name__)


@dataclass
class SymbolScanResult:
    """Outcome of scanning one symbol."""

    symbol: str
    price_bars: int = 0
    indicator_records: int = 0
    signals: list[Signal] = field(default_factory=list)
    confluence: list[ConfluenceSignal] = field(default_factory=list)
    latest_confluence: ConfluenceSignal | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def direction_counts(self) -> dict[SignalDirection, int]:
        """Number of individual signals per direction."""
        counts = Counter(s.direction for s in self.signals)
        return {d: counts.get(d, 0) for d in SignalDirection}


@dataclass
class ScanReport:
    """Aggregate result of a scan run."""

    started_at: datetime
    finished_at: datetime | None = None
    duration_seconds: float = 0.0
    results: list[SymbolScanResult] = field(default_factory=list)

    @property
    def total_signals(self) -> int:
        return sum(len(r.signals) for r in self.results)

    @property
    def total_confluence(self) -> int:
        return sum(len(r.confluence) for r in self.results)

    @property
    def failed_symbols(self) -> list[str]:
        return [r.symbol for r in self.results if not r.ok]


class ScanRunner:
    """Orchestrates data access, the engine and persistence for a batch."""

    def __init__(
        self,
        engine: SignalEngine,
        prices: PriceRepository,
        indicators: IndicatorRepository,
        sink: SignalSink,
        include_confluence: bool = True,
    ):
        self.engine = engine
        self.prices = prices
        self.indicators = indicators
        self.sink = sink
        self.include_confluence = include_confluence

    async def scan_symbol(self, symbol: str) -> SymbolScanResult:
        """Scan one symbol. Never raises; errors land on the result."""
        result = SymbolScanResult(symbol=symbol)
        try:
            prices = await self.prices.get_prices(symbol)
            indicators = await self.indicators.get_indicators(symbol)
        except Exception as e:
            logger.error(f"{symbol}: failed to load market data: {e}")
            result.error = f"load failed: {e}"
            return result

        result.price_bars = len(prices)
        result.indicator_records = len(indicators)

        if not prices or not indicators:
            logger.info(f"{symbol}: no data ({len(prices)} bars, {len(indicators)} indicators)")
            return result

        if self.include_confluence:
            signals, confluence = self.engine.generate_with_confluence(
                symbol, indicators, prices
            )
            result.latest_confluence = self.engine.latest_confluence(
                symbol, indicators, prices
            )
        else:
            signals = self.engine.generate(symbol, indicators, prices)
            confluence = []

        try:
            result.signals = [await self.sink.save_signal(s) for s in signals]
            result.confluence = [await self.sink.save_confluence(c) for c in confluence]
        except Exception as e:
            logger.error(f"{symbol}: failed to save signals: {e}")
            result.error = f"save failed: {e}"
            return result

        if result.latest_confluence is not None:
            latest = result.latest_confluence
            logger.info(
                f"{symbol}: {len(result.signals)} signals, {len(result.confluence)} confluence, "
                f"latest {latest.direction.value} ({latest.strength:.2f})"
            )
        else:
            logger.info(
                f"{symbol}: {len(result.signals)} signals, {len(result.confluence)} confluence"
            )
        return result

    async def run(self, symbols: list[str]) -> ScanReport:
        """Scan symbols in the given order."""
        report = ScanReport(started_at=datetime.now(timezone.utc))
        start = time.perf_counter()

        for symbol in symbols:
            report.results.append(await self.scan_symbol(symbol))

        report.duration_seconds = time.perf_counter() - start
        report.finished_at = datetime.now(timezone.utc)

        if report.failed_symbols:
            logger.warning(
                "Scan finished with %d failed symbols: %s",
                len(report.failed_symbols),
                ", ".join(report.failed_symbols),
            )
        return report
