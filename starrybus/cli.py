"""Command line entry point for the starrybus arrival board."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from starrybus.board import ArrivalBoard
from starrybus.config import load_config
from starrybus.data.datamall_client import DataMallClient
from starrybus.data.poller import StopPoller
from starrybus.logging_setup import configure_logging
from starrybus.rendering.terminal import TerminalDisplay

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="starrybus", description="Show upcoming bus arrivals")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML config (default: $XDG_CONFIG_HOME/starrybus.yaml)",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Poll every stop once, draw, and exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2

    if args.log_level:
        config = replace(config, log=replace(config.log, level=args.log_level.upper()))
    configure_logging(config.log)

    if not config.api.api_key:
        logger.error("Must set environment variable API_KEY")
        print("Must set environment variable API_KEY", file=sys.stderr)
        return 2

    client = DataMallClient(
        config.api.api_key,
        base_url=config.api.base_url,
        timeout_seconds=config.api.timeout_seconds,
    )
    board = ArrivalBoard(config, StopPoller(client), TerminalDisplay())

    try:
        asyncio.run(board.run(passes=1 if args.once else None))
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
