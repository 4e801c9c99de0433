"""Report formatting for scan results.

Outputs results to console (formatted tables) and JSON files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from scanner.runner import ScanReport, SymbolScanResult
from signal_engine.models.signal import SignalDirection


def _symbol_row(result: SymbolScanResult) -> dict[str, Any]:
    latest = result.latest_confluence
    return {
        "symbol": result.symbol,
        "price_bars": result.price_bars,
        "indicator_records": result.indicator_records,
        "error": result.error,
        "signals": [s.model_dump(mode="json") for s in result.signals],
        "confluence": [c.model_dump(mode="json") for c in result.confluence],
        "latest_confluence": latest.model_dump(mode="json") if latest else None,
    }


class ReportFormatter:
    """Format scan results for display and export."""

    @staticmethod
    def to_dict(report: ScanReport) -> dict[str, Any]:
        return {
            "started_at": report.started_at.isoformat(),
            "finished_at": report.finished_at.isoformat() if report.finished_at else None,
            "duration_seconds": round(report.duration_seconds, 3),
            "total_signals": report.total_signals,
            "total_confluence": report.total_confluence,
            "failed_symbols": report.failed_symbols,
            "symbols": [_symbol_row(r) for r in report.results],
        }

    @staticmethod
    def print_console(report: ScanReport) -> None:
        """Print formatted report to console."""
        print("\n" + "=" * 70)
        print("  SIGNAL SCAN")
        print("=" * 70)
        print(f"  Symbols:     {len(report.results)}")
        print(f"  Signals:     {report.total_signals}")
        print(f"  Confluence:  {report.total_confluence}")
        print(f"  Duration:    {report.duration_seconds:.2f}s")

        print("\n" + "-" * 70)
        print(
            f"  {'Symbol':<10} {'Bars':>6} {'Bull':>6} {'Bear':>6} {'Neut':>6} "
            f"{'Conf':>6}  {'Latest confluence':<18}"
        )
        for r in report.results:
            if not r.ok:
                print(f"  {r.symbol:<10} ERROR  {r.error}")
                continue
            counts = r.direction_counts()
            latest = (
                f"{r.latest_confluence.direction.value} {r.latest_confluence.strength:.2f}"
                if r.latest_confluence
                else "-"
            )
            print(
                f"  {r.symbol:<10} {r.price_bars:>6} "
                f"{counts[SignalDirection.BULLISH]:>6} "
                f"{counts[SignalDirection.BEARISH]:>6} "
                f"{counts[SignalDirection.NEUTRAL]:>6} "
                f"{len(r.confluence):>6}  {latest:<18}"
            )
        print("=" * 70 + "\n")

    @staticmethod
    def save_json(report: ScanReport, path: str | Path) -> None:
        """Save full report to JSON file."""
        with open(path, "wb") as f:
            f.write(orjson.dumps(ReportFormatter.to_dict(report), option=orjson.OPT_INDENT_2))
        print(f"  Report saved to: {path}")
