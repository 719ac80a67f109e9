#!/usr/bin/env python3
"""Bank host command line.

Usage:
    python -m bank_host list
    python -m bank_host deposit acme_bank 100
    python -m bank_host --plugins-file plugins.yaml list

Environment Variables:
    CAPREG_PLUGINS_FILE=plugins.yaml   # Extra plugin references (JSON or YAML)
    CAPREG_DUPLICATE_POLICY=error      # or "replace"
    CAPREG_LOG_LEVEL=WARNING
    CAPREG_JSON_LOGS=false

Exit codes:
    0: Success
    1: Startup failure (plugin discovery or registration)
    2: Unknown bank or rejected amount
"""

import argparse
import dataclasses
import sys
from typing import List, Optional

from capreg import RegistryError, RegistrySettings, configure_logging, get_logger

from bank_host.service import BankService
from bank_host.wiring import build_bank_registry

EXIT_OK = 0
EXIT_STARTUP_FAILED = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bank_host",
        description="Deposit into registered bank plugins and list their OAuth links",
    )
    parser.add_argument("--plugins-file", help="JSON/YAML file listing extra 'module:attribute' plugins")
    parser.add_argument("--log-level", help="Log level (default from CAPREG_LOG_LEVEL or INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Render logs as JSON")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List registered banks with their OAuth links")

    deposit = commands.add_parser("deposit", help="Deposit an amount into a bank")
    deposit.add_argument("bank", help="Bank name, e.g. acme_bank")
    deposit.add_argument("amount", type=int, help="Positive whole amount")
    return parser


def _settings_from_args(args: argparse.Namespace) -> RegistrySettings:
    settings = RegistrySettings.from_env()
    overrides = {}
    if args.plugins_file:
        overrides["plugins_file"] = args.plugins_file
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    if args.json_logs:
        overrides["json_logs"] = True
    return dataclasses.replace(settings, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = _settings_from_args(args)
        configure_logging(settings.log_level, settings.json_logs)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_STARTUP_FAILED

    logger = get_logger()

    try:
        registry = build_bank_registry(settings, logger=logger)
    except RegistryError as exc:
        logger.error("bank_registry_failed", error=str(exc), category=exc.category.value)
        print(f"Startup failed: {exc}", file=sys.stderr)
        return EXIT_STARTUP_FAILED

    service = BankService(registry, logger=logger)

    if args.command == "list":
        links = service.oauth_links()
        if not links:
            print("No banks registered.")
        for link in links:
            print(f"{link.bank}\t{link.url}")
        return EXIT_OK

    response = service.deposit(args.bank, args.amount)
    if response.ok:
        print(response.message)
        return EXIT_OK

    print(response.message, file=sys.stderr)
    if response.available:
        print(f"Available banks: {', '.join(response.available)}", file=sys.stderr)
    return EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
