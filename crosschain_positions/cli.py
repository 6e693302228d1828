"""Command-line interface for the cross-chain position aggregator."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from .config import load_config
from .errors import WalletResolutionError
from .logging_setup import configure_logging
from .models import AggregationOptions
from .positions import get_position_recommendations, view_to_dict
from .services import PositionAggregator


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="crosschain-positions",
        description="Cross-chain money market position aggregator",
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

    positions_parser = sub.add_parser(
        "positions", help="Aggregate a wallet's positions across networks"
    )
    positions_parser.add_argument(
        "wallet_id",
        nargs="?",
        default="",
        help="Wallet id (default: the configured default_wallet)",
    )
    positions_parser.add_argument(
        "--network",
        dest="networks",
        action="append",
        default=None,
        help="Network to query; repeat for several (default: all supported)",
    )
    positions_parser.add_argument(
        "--include-zero",
        action="store_true",
        default=None,
        help="Keep zero-balance positions and networks",
    )
    positions_parser.add_argument(
        "--min-usd",
        type=float,
        default=None,
        help="Drop positions whose supply+borrow USD is below this value",
    )

    sub.add_parser("networks", help="List configured networks")

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "networks":
        for name, network in config.networks.items():
            print(f"{name}\t{len(network.endpoints)} endpoint(s)")
        return 0

    aggregator = PositionAggregator.from_config(config)
    options = AggregationOptions(
        network_ids=tuple(args.networks) if args.networks else None,
        include_zero_balances=(
            config.aggregator.include_zero_balances
            if args.include_zero is None
            else args.include_zero
        ),
        min_usd_value=(
            config.aggregator.min_usd_value if args.min_usd is None else args.min_usd
        ),
    )

    try:
        view = await aggregator.aggregate(args.wallet_id, options)
    except WalletResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(view_to_dict(view, get_position_recommendations(view)), indent=2))
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
