"""Batch signal scanner.

Outer layer around signal_engine/: loads market data, applies threshold
overrides, runs the engine for each symbol and persists the output.

Usage:
    python -m scanner --data market_data.json
    python -m scanner --data market_data.json --symbols AAPL,MSFT --output scan.json
"""

from scanner.config import ScannerSettings, ThresholdConfig, load_thresholds
from scanner.runner import ScanReport, ScanRunner, SymbolScanResult

__all__ = [
    "ScannerSettings",
    "ThresholdConfig",
    "load_thresholds",
    "ScanReport",
    "ScanRunner",
    "SymbolScanResult",
]
