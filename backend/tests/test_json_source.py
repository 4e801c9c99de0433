"""Tests for the JSON market data source."""

from datetime import date

import orjson
import pytest

from scanner.storage import JsonMarketDataSource
from signal_engine.repository import IndicatorRepository, PriceRepository


def _bar(day: str, close: float) -> dict:
    return {"date": day, "open": close, "high": close + 1, "low": close - 1, "close": close}


DOCUMENT = {
    "prices": {
        "MSFT": [_bar("2026-01-02", 400.0)],
        "AAPL": [
            _bar("2026-01-05", 192.0),
            _bar("2026-01-02", 190.0),
            _bar("2026-01-05", 193.5),
        ],
    },
    "indicators": {
        "AAPL": [
            ["2026-01-05", "RSI_14", 28.0],
            {"date": "2026-01-02", "indicator_name": "ADX_14", "value": 21.5},
        ],
        "NVDA": [["2026-01-02", "RSI_14", 55.0]],
    },
}


class TestJsonMarketDataSource:
    def test_satisfies_repository_protocols(self):
        source = JsonMarketDataSource(DOCUMENT)
        assert isinstance(source, PriceRepository)
        assert isinstance(source, IndicatorRepository)

    def test_list_symbols(self):
        source = JsonMarketDataSource(DOCUMENT)
        assert source.list_symbols() == ["AAPL", "MSFT", "NVDA"]

    @pytest.mark.asyncio
    async def test_prices_sorted_and_deduplicated(self):
        source = JsonMarketDataSource(DOCUMENT)

        prices = await source.get_prices("AAPL")

        assert [p.date for p in prices] == [date(2026, 1, 2), date(2026, 1, 5)]
        assert prices[1].close == 193.5
        assert prices[0].volume == 0
        assert all(p.symbol == "AAPL" for p in prices)

    @pytest.mark.asyncio
    async def test_indicators_both_formats(self):
        source = JsonMarketDataSource(DOCUMENT)

        indicators = await source.get_indicators("AAPL")

        assert [(i.date, i.indicator_name, i.value) for i in indicators] == [
            (date(2026, 1, 5), "RSI_14", 28.0),
            (date(2026, 1, 2), "ADX_14", 21.5),
        ]
        assert all(i.symbol == "AAPL" for i in indicators)

    @pytest.mark.asyncio
    async def test_unknown_symbol_is_empty(self):
        source = JsonMarketDataSource(DOCUMENT)
        assert await source.get_prices("TSLA") == []
        assert await source.get_indicators("MSFT") == []

    @pytest.mark.asyncio
    async def test_bad_indicator_row(self):
        source = JsonMarketDataSource(
            {"indicators": {"AAPL": [["2026-01-02", "RSI_14"]]}}
        )
        with pytest.raises(ValueError, match="indicator row"):
            await source.get_indicators("AAPL")

    @pytest.mark.asyncio
    async def test_unsupported_indicator_record(self):
        source = JsonMarketDataSource({"indicators": {"AAPL": [42]}})
        with pytest.raises(ValueError, match="unsupported"):
            await source.get_indicators("AAPL")

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            JsonMarketDataSource([1, 2, 3])


class TestFromPath:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "market_data.json"
        path.write_bytes(orjson.dumps(DOCUMENT))

        source = JsonMarketDataSource.from_path(path)

        assert source.list_symbols() == ["AAPL", "MSFT", "NVDA"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonMarketDataSource.from_path(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "market_data.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            JsonMarketDataSource.from_path(path)
