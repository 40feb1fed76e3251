"""Command-line interface for LINE loan quotes."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import load_config
from .logging_setup import configure_logging
from .services import QuoteService


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="line-loans",
        description="Quote LINE loans for a collateral amount",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    quote_parser = sub.add_parser("quote", help="Quote a loan once")
    quote_parser.add_argument("collateral", help="Collateral amount")

    watch_parser = sub.add_parser("watch", help="Re-quote whenever the price moves")
    watch_parser.add_argument("collateral", help="Collateral amount")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Price poll interval in seconds (overrides config)",
    )

    return parser


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    service = QuoteService(config)

    if args.command == "quote":
        display = await service.quote(args.collateral)
        print(service.format_quote(display))
    elif args.command == "watch":
        await service.run_continuous(args.collateral, args.interval)
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
