# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Output formatting for CLI commands.

JSON mode prints the full response envelope. Text mode prints the ``data``
payload as ``key: value`` lines, one block per record.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from .config import get_cli_config


def _format_record(record: dict[str, Any]) -> str:
    lines = []
    for key, value in record.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, default=str)
        lines.append(f"{key}: {value}")
    return "\n".join(lines)


def format_text(data: Any) -> str:
    """Render response data for humans."""
    if isinstance(data, list):
        return "\n\n".join(format_text(item) for item in data)
    if isinstance(data, dict):
        return _format_record(data)
    return str(data)


def output_result(data: dict[str, Any], output_format: str | None = None) -> None:
    """Print API response in the configured output format.

    If output is "json", pretty-print the full JSON response.
    If the response has a "formatted" key, print that directly.
    Otherwise render the "data" payload as text.
    """
    fmt = output_format or get_cli_config().output

    if fmt == "json":
        print(json.dumps(data, indent=2, default=str))
    elif "formatted" in data:
        print(data["formatted"])
    elif "data" in data:
        print(format_text(data["data"]))
    else:
        print(json.dumps(data, indent=2, default=str))


def output_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)
