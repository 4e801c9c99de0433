"""Market data source backed by a single JSON document.

Layout:

    {
      "prices": {
        "AAPL": [{"date": "2026-01-02", "open": 1, "high": 2, "low": 0.5,
                  "close": 1.5, "volume": 1000}, ...]
      },
      "indicators": {
        "AAPL": [["2026-01-02", "RSI_14", 55.2],
                 {"date": "2026-01-02", "indicator_name": "ADX_14", "value": 21.0}, ...]
      }
    }

Records are validated per symbol when requested, so one malformed symbol
does not prevent scanning the others.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson

from signal_engine.models.market import DailyPrice, TechnicalIndicator

logger = logging.getLogger(__name__)


def _parse_indicator(symbol: str, raw: Any) -> TechnicalIndicator:
    if isinstance(raw, (list, tuple)):
        if len(raw) != 3:
            raise ValueError(f"{symbol}: indicator row must be [date, name, value], got {raw!r}")
        day, name, value = raw
        return TechnicalIndicator(symbol=symbol, date=day, indicator_name=name, value=value)
    if isinstance(raw, dict):
        return TechnicalIndicator(**{**raw, "symbol": symbol})
    raise ValueError(f"{symbol}: unsupported indicator record {raw!r}")


class JsonMarketDataSource:
    """Implements PriceRepository and IndicatorRepository over a JSON document."""

    def __init__(self, document: dict[str, Any]):
        if not isinstance(document, dict):
            raise ValueError("Market data document must be a JSON object")
        self._prices: dict[str, list[Any]] = document.get("prices") or {}
        self._indicators: dict[str, list[Any]] = document.get("indicators") or {}

    @classmethod
    def from_path(cls, path: Path) -> JsonMarketDataSource:
        """Read and parse a market data file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid JSON or not an object.
        """
        with open(path, "rb") as f:
            document = orjson.loads(f.read())
        source = cls(document)
        logger.info(
            "Loaded market data from %s: %d symbols", path, len(source.list_symbols())
        )
        return source

    def list_symbols(self) -> list[str]:
        """Symbols with prices or indicators, sorted."""
        return sorted(set(self._prices) | set(self._indicators))

    async def get_prices(self, symbol: str) -> list[DailyPrice]:
        """Daily bars in ascending date order; later duplicates win."""
        by_date: dict = {}
        for raw in self._prices.get(symbol, []):
            price = DailyPrice(**{**raw, "symbol": symbol})
            by_date[price.date] = price
        return [by_date[d] for d in sorted(by_date)]

    async def get_indicators(self, symbol: str) -> list[TechnicalIndicator]:
        """Indicator records in file order."""
        return [_parse_indicator(symbol, raw) for raw in self._indicators.get(symbol, [])]
