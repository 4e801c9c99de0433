"""Signal engine: run every detector and the confluence vote over a symbol's history.

Pure and synchronous. Given the same configuration and inputs it returns
identical lists in identical order, and it is safe to call concurrently
for different symbols.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from signal_engine.confluence import evaluate_confluence
from signal_engine.detectors import DetectionContext, run_detectors
from signal_engine.indicators.index import (
    IndicatorValues,
    build_close_lookup,
    build_indicator_index,
    sorted_dates,
)
from signal_engine.models.config import ConfluenceConfig, SignalConfig
from signal_engine.models.market import DailyPrice, TechnicalIndicator
from signal_engine.models.signal import ConfluenceSignal, Signal

logger = logging.getLogger(__name__)

# Closing price used for dates without a price bar
MISSING_PRICE = 0.0


class SignalEngine:
    """Detects single-indicator signals and multi-indicator confluence.

    Configuration is passed in explicitly and never read from the
    environment; the engine holds no other state.
    """

    def __init__(
        self,
        config: SignalConfig | None = None,
        confluence_config: ConfluenceConfig | None = None,
    ):
        self.config = config or SignalConfig()
        self.confluence_config = confluence_config or ConfluenceConfig()

    def with_confluence_config(self, confluence_config: ConfluenceConfig) -> SignalEngine:
        """Return a new engine sharing this detector config."""
        return SignalEngine(config=self.config, confluence_config=confluence_config)

    # ------------------------------------------------------------------
    # Individual signals
    # ------------------------------------------------------------------

    def generate(
        self,
        symbol: str,
        indicators: Sequence[TechnicalIndicator],
        prices: Sequence[DailyPrice],
    ) -> list[Signal]:
        """Generate crossing signals for every indicator date, oldest first.

        The look-back for each date is the previous date present in the
        indicator index, so calendar gaps are skipped.

        Args:
            symbol: Symbol the records belong to.
            indicators: Indicator records in any order.
            prices: Daily bars for the same symbol.

        Returns:
            Signals ordered by date, then by detector kind.
        """
        if not indicators or not prices:
            return []

        index = build_indicator_index(indicators)
        closes = build_close_lookup(prices)

        signals: list[Signal] = []
        prev: IndicatorValues | None = None
        for day in sorted_dates(index):
            today = index[day]
            ctx = DetectionContext(
                symbol=symbol,
                date=day,
                price=closes.get(day, MISSING_PRICE),
                today=today,
                prev=prev,
            )
            signals.extend(run_detectors(ctx, self.config))
            prev = today

        logger.debug(
            "%s: %d signals over %d indicator dates", symbol, len(signals), len(index)
        )
        return signals

    # ------------------------------------------------------------------
    # Confluence
    # ------------------------------------------------------------------

    def detect_confluence(
        self,
        symbol: str,
        on_date: date,
        price: float,
        indicators: IndicatorValues,
    ) -> ConfluenceSignal | None:
        """Evaluate confluence for a single date's indicator map."""
        return evaluate_confluence(
            symbol, on_date, price, indicators, self.confluence_config
        )

    def generate_with_confluence(
        self,
        symbol: str,
        indicators: Sequence[TechnicalIndicator],
        prices: Sequence[DailyPrice],
    ) -> tuple[list[Signal], list[ConfluenceSignal]]:
        """Generate individual signals plus one confluence check per date.

        Confluence dates follow the index's first-seen order rather than
        chronological order. Without prices the individual list is empty
        but confluence is still evaluated with a 0.0 price.

        Returns:
            (individual signals, confluence signals)
        """
        individual = self.generate(symbol, indicators, prices)
        index = build_indicator_index(indicators)
        closes = build_close_lookup(prices)

        confluence: list[ConfluenceSignal] = []
        for day, day_indicators in index.items():
            result = self.detect_confluence(
                symbol, day, closes.get(day, MISSING_PRICE), day_indicators
            )
            if result is not None:
                confluence.append(result)

        logger.debug(
            "%s: %d signals, %d confluence events", symbol, len(individual), len(confluence)
        )
        return individual, confluence

    def latest_confluence(
        self,
        symbol: str,
        indicators: Sequence[TechnicalIndicator],
        prices: Sequence[DailyPrice],
    ) -> ConfluenceSignal | None:
        """Evaluate confluence for the most recent price bar only.

        Returns None if either input is empty or the latest bar's date has
        no indicator values.
        """
        if not indicators or not prices:
            return None

        latest = max(prices, key=lambda p: p.date)
        day_indicators = build_indicator_index(indicators).get(latest.date)
        if not day_indicators:
            return None
        return self.detect_confluence(symbol, latest.date, latest.close, day_indicators)
