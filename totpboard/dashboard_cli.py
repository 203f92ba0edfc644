#!/usr/bin/env python3
"""
dashboard_cli.py — entry point: load the config, then redraw the table every second.

Usage:
    totpboard                  # reads ./config.yml
    totpboard path/to/accounts.yml
    python -m totpboard path/to/accounts.yml

Exit status 1 if the config cannot be loaded or has no accounts.
Ctrl+C stops the dashboard.
"""

from typing import Optional, Sequence
import argparse
import logging
import sys
import time

from colorama import just_fix_windows_console

from .config_loader import (
    DEFAULT_CONFIG_PATH,
    Account,
    ConfigError,
    EmptyConfigError,
    load_config,
    require_accounts,
)
from .renderer import render

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 1.0  # seconds
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def refresh_loop(accounts: Sequence[Account], out=None,
                 interval: float = REFRESH_INTERVAL,
                 clock=time.time, sleep=time.sleep, monotonic=time.monotonic,
                 max_ticks: Optional[int] = None) -> int:
    """
    Render now, then once per `interval` on a fixed cadence.

    Ticks missed while a render overran are dropped, not replayed.
    Runs forever unless `max_ticks` is given; returns the number of renders.
    """
    ticks = 0
    deadline = monotonic()
    while True:
        render(accounts, clock(), out)
        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            return ticks

        deadline += interval
        current = monotonic()
        while deadline <= current:
            deadline += interval
        sleep(deadline - current)


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="totpboard",
        description="Terminal dashboard showing live TOTP codes for the accounts in a YAML file",
    )
    p.add_argument("config", nargs="?", default=DEFAULT_CONFIG_PATH,
                   help=f"Path to the accounts file (default: {DEFAULT_CONFIG_PATH})")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    args = build_parser().parse_args(argv)
    just_fix_windows_console()

    try:
        config = require_accounts(load_config(args.config))
    except EmptyConfigError as e:
        logger.critical("%s", e)
        return 1
    except ConfigError as e:
        logger.critical("Error loading config: %s", e)
        return 1

    logger.info("Loaded %d account(s) from %s", len(config.accounts), args.config)
    try:
        refresh_loop(config.accounts)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
