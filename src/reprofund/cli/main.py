#!/usr/bin/env python3
"""
reprofund CLI - client for the research-funding record store.

Commands:
  reprofund researchers ...   Register and look up researchers
  reprofund proposals ...     Create, fund and inspect proposals
  reprofund reviews ...       Submit and inspect reviews
  reprofund milestones ...    Create and verify milestones
  reprofund proofs ...        Submit and inspect proofs of reproduction
  reprofund export            Dump every table as JSON
"""

from __future__ import annotations

import argparse
import sys

from .commands import COMMAND_MODULES
from .config import OUTPUT_FORMATS, CLIConfig, set_cli_config


def app() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="reprofund",
        description="Client for the reprofund research-funding store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reprofund researchers create "Ada L" "12 Main St" ada@x.io 5551234567
  reprofund proposals create 1 "Replicate X" -d "..." -m "..." -t 1000
  reprofund milestones create 2 "Phase 1" --funding 500 --deadline 2025-01-01
  reprofund proofs submit 3 abc123 def456
  reprofund export -o snapshot.json
        """,
    )
    parser.add_argument("--server", dest="server_url", help="Server URL (default http://127.0.0.1:8430)")
    parser.add_argument("--caller", help="Caller identity sent as X-Caller-Id")
    parser.add_argument("--output", choices=OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for module in COMMAND_MODULES:
        module.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = app()
    args = parser.parse_args(argv)

    set_cli_config(
        CLIConfig.load(
            server_url=args.server_url,
            caller=args.caller,
            output=args.output,
            timeout=args.timeout,
        )
    )

    handler = getattr(args, "func", None)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
