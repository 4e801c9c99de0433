"""Scanner storage: market data sources and signal sinks."""

from scanner.storage.json_source import JsonMarketDataSource
from scanner.storage.memory import InMemorySignalStore

__all__ = ["JsonMarketDataSource", "InMemorySignalStore"]
