"""
Command line interface: print EMA lines for a price history CSV.

Usage:
    emacraft --prices acme.csv --start 2024-01-01 --end 2024-03-31 --period 20
    emacraft --prices acme.csv --start 2024-01-01 --end 2024-03-31 \\
        --period 20 --period 50 --format json
    emacraft --prices acme.csv --currency EUR --convert-to USD --rate 1.08 \\
        --start 2024-01-01 --end 2024-03-31
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Dict, List, Optional

from .api import ema_lines
from .converter import FixedRateConverter
from .models import DisplayInterval, EMAResult
from .security import Security
from .utils.config import get_config
from .utils.exceptions import EmaCraftError
from .utils.logger import setup_logger


def parse_dates(parser: argparse.ArgumentParser, start_str: str, end_str: str) -> DisplayInterval:
    """Parse --start/--end into a DisplayInterval, exiting on bad input."""
    try:
        interval = DisplayInterval.from_strings(start_str, end_str)
    except ValueError as e:
        parser.error(f"Invalid date format: {e}. Use YYYY-MM-DD")
    if interval.start > interval.end:
        parser.error("--start must not be after --end")
    return interval


def format_output(lines: Dict[int, EMAResult], format_type: str = "table") -> None:
    """
    Print EMA lines.
    
    Args:
        lines: Dict of period -> EMAResult
        format_type: Output format ('table', 'csv', 'json')
    """
    if format_type == "table":
        for period, result in lines.items():
            print("\n" + "=" * 40)
            print(f"EMA {period}: {len(result)} points")
            print(f"{'Date':<12} {'EMA':>20}")
            print("=" * 40)
            for day, value in zip(result.dates, result.values):
                print(f"{day.isoformat():<12} {value:>20.8f}")
        print("=" * 40)

    elif format_type == "csv":
        print("period,date,ema")
        for period, result in lines.items():
            for day, value in zip(result.dates, result.values):
                print(f"{period},{day.isoformat()},{value}")

    elif format_type == "json":
        output = {str(period): result.to_records() for period, result in lines.items()}
        print(json.dumps(output, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emacraft",
        description="Compute exponential moving averages of a price history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 20-period EMA for the first quarter
  emacraft --prices acme.csv --start 2024-01-01 --end 2024-03-31 --period 20

  # Several lines as JSON
  emacraft --prices acme.csv --start 2024-01-01 --end 2024-03-31 --period 20 --period 50 --format json

  # Convert EUR prices to USD at a fixed rate
  emacraft --prices acme.csv --currency EUR --convert-to USD --rate 1.08 --start 2024-01-01 --end 2024-03-31
        """,
    )

    parser.add_argument(
        "--prices",
        type=str,
        required=True,
        help="CSV file with 'date' and 'close' columns",
    )

    parser.add_argument(
        "--start",
        type=str,
        required=True,
        help="First date to show (YYYY-MM-DD)",
    )

    parser.add_argument(
        "--end",
        type=str,
        help="Last date to show (YYYY-MM-DD, default: today)",
    )

    parser.add_argument(
        "--period",
        type=int,
        action="append",
        help="EMA range in periods, repeatable (default: EMA_DEFAULT_PERIOD)",
    )

    parser.add_argument(
        "--currency",
        type=str,
        help="Currency of the prices in the CSV (e.g. EUR)",
    )

    parser.add_argument(
        "--convert-to",
        type=str,
        help="Convert prices to this currency before averaging. Requires --currency and --rate.",
    )

    parser.add_argument(
        "--rate",
        type=float,
        help="Fixed exchange rate from --currency to --convert-to",
    )

    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "csv", "json"],
        default="table",
        help="Output format (default: table)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except EmaCraftError as e:
        parser.error(str(e))

    logger = setup_logger(
        "emacraft",
        log_level=args.log_level or config.log_level,
        log_file=config.log_file,
    )

    if args.convert_to and (args.rate is None or not args.currency):
        parser.error("--convert-to requires --currency and --rate")
    if args.rate is not None and not args.convert_to:
        parser.error("--rate is only used with --convert-to")
    if args.rate is not None and args.rate <= 0:
        parser.error("--rate must be positive")

    end = args.end or datetime.now().strftime("%Y-%m-%d")
    interval = parse_dates(parser, args.start, end)
    periods = args.period or [config.default_period]

    converter = None
    if args.convert_to:
        converter = FixedRateConverter(args.convert_to, {args.currency: args.rate})

    try:
        security = Security.from_csv(args.prices, currency_code=args.currency)
        lines = ema_lines(security, interval, periods, converter=converter)
        results = {period: line.get_ema() for period, line in lines.items()}
    except EmaCraftError as e:
        logger.error(f"✗ {e}")
        return 1

    if all(result.is_empty for result in results.values()):
        logger.warning(f"No prices for {security.name} between {interval.start} and {interval.end}")

    format_output(results, args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
