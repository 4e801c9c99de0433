"""CLI entry point for the signal scanner.

Usage:
    python -m scanner --data market_data.json
    python -m scanner --data market_data.json --symbols AAPL,MSFT
    python -m scanner --data market_data.json --thresholds thresholds.yaml --output scan.json
    python -m scanner --data market_data.json --no-confluence -v
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml

from scanner.config import get_scanner_settings, load_thresholds
from scanner.report import ReportFormatter
from scanner.runner import ScanRunner
from scanner.storage import InMemorySignalStore, JsonMarketDataSource

logger = logging.getLogger("scanner")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_scanner_settings()
    parser = argparse.ArgumentParser(
        description="Detect indicator signals and confluence events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m scanner --data market_data.json
  python -m scanner --data market_data.json --symbols AAPL,MSFT --output scan.json
        """,
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=settings.data_path,
        help=f"Market data JSON file (default: {settings.data_path})",
    )
    parser.add_argument(
        "--symbols",
        type=str,
        default=",".join(settings.symbols),
        help="Comma-separated symbols (default: all symbols in the data file)",
    )
    parser.add_argument(
        "--thresholds",
        type=Path,
        default=settings.thresholds_path,
        help=f"Threshold overrides YAML (default: {settings.thresholds_path})",
    )
    parser.add_argument(
        "--no-confluence",
        action="store_true",
        default=not settings.confluence,
        help="Skip confluence evaluation",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Save JSON report to file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else get_scanner_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    try:
        source = JsonMarketDataSource.from_path(args.data)
    except (OSError, ValueError) as e:
        logger.error("Cannot load market data from %s: %s", args.data, e)
        return 1

    try:
        thresholds = load_thresholds(args.thresholds)
    except (ValueError, yaml.YAMLError) as e:
        logger.error("Invalid thresholds in %s: %s", args.thresholds, e)
        return 1

    symbols = [s.strip() for s in args.symbols.split(",") if s.strip()]
    if not symbols:
        symbols = source.list_symbols()

    runner = ScanRunner(
        engine=thresholds.build_engine(),
        prices=source,
        indicators=source,
        sink=InMemorySignalStore(),
        include_confluence=not args.no_confluence,
    )
    report = await runner.run(symbols)

    ReportFormatter.print_console(report)
    if args.output:
        ReportFormatter.save_json(report, args.output)

    return 1 if report.failed_symbols else 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
