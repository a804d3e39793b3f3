"""Snapshot export command."""

from __future__ import annotations

import argparse
import json

from ..http_client import ReprofundAPIError, ReprofundConnectionError, get_client
from ..output import output_error, output_result


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the export command."""
    export_p = subparsers.add_parser("export", help="Export a snapshot of every table")
    export_p.add_argument("--file", "-o", dest="output_file", help="Write the snapshot to a file")
    export_p.set_defaults(func=cmd_export)


def cmd_export(args: argparse.Namespace) -> int:
    """Export a snapshot to stdout or a file."""
    client = get_client()
    try:
        result = client.get("/export")
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1

    if not getattr(args, "output_file", None):
        output_result(result, output_format="json")
        return 0

    snapshot = result.get("data", {})
    try:
        with open(args.output_file, "w") as f:
            json.dump(snapshot, f, indent=2, sort_keys=True)
    except OSError as e:
        output_error(f"Cannot write {args.output_file}: {e}")
        return 1

    total = sum(len(rows) for rows in snapshot.get("tables", {}).values())
    print(f"Exported {total} records (counter={snapshot.get('counter', 0)}) to {args.output_file}")
    return 0
