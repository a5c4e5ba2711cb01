#!/usr/bin/env python3
"""CLI entry point for ApprovalRadar.

Usage:
    approvalradar [--region REGION] [--mine] [--debug] [--timeout MINUTES] [--config PATH]

Prints one CodeCommit console link per line on stdout. Progress and errors
go to stderr.
"""

import argparse
import sys

from approvalradar.commands.scan import cmd_scan
from approvalradar.domain.settings import CONFIG_ENV_VAR, DEFAULT_REGION, DEFAULT_TIMEOUT_MINUTES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="approvalradar",
        description="List open CodeCommit pull requests that are waiting on your approval",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Settings are read from --config, ${CONFIG_ENV_VAR} or
~/.config/approvalradar/config.yaml, and flags override them.

Examples:
  approvalradar
  approvalradar --mine
  approvalradar --region eu-west-1 --debug 2> scan.log
        """,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )
    parser.add_argument(
        "--region",
        help=f"AWS region (default: {DEFAULT_REGION})",
    )
    parser.add_argument(
        "--mine",
        action="store_true",
        default=None,
        help="List open PRs created by me",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="MINUTES",
        help=f"Give up on the whole scan after this many minutes (default: {DEFAULT_TIMEOUT_MINUTES:g})",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="YAML settings file",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    return cmd_scan(
        region=args.region,
        mine=args.mine,
        debug=args.debug,
        timeout_minutes=args.timeout,
        config_path=args.config,
    )


if __name__ == "__main__":
    sys.exit(main())
