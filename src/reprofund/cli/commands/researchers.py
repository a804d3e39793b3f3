# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Researcher commands: register, look up and list researchers.

Commands:
    reprofund researchers create <name> <address> <email> <phone>
    reprofund researchers get <researcher_id>
    reprofund researchers list
    reprofund researchers me
    reprofund researchers proposals <researcher_id>
"""

from __future__ import annotations

import argparse

from ..http_client import ReprofundAPIError, ReprofundConnectionError, get_client
from ..output import output_error, output_result


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the researchers sub-command group."""
    researchers_parser = subparsers.add_parser("researchers", help="Manage researchers")
    researchers_sub = researchers_parser.add_subparsers(dest="researchers_command", required=True)

    # --- create ---
    create_p = researchers_sub.add_parser("create", help="Register the caller as a researcher")
    create_p.add_argument("name", help="Full name (at least 2 characters)")
    create_p.add_argument("address", help="Postal address (at least 5 characters)")
    create_p.add_argument("email", help="Email address")
    create_p.add_argument("phone", help="Phone number, 10 to 15 digits")
    create_p.set_defaults(func=cmd_researchers_create)

    # --- get ---
    get_p = researchers_sub.add_parser("get", help="Get a researcher by ID")
    get_p.add_argument("researcher_id", type=int, help="Researcher ID")
    get_p.set_defaults(func=cmd_researchers_get)

    # --- list ---
    list_p = researchers_sub.add_parser("list", help="List all researchers")
    list_p.set_defaults(func=cmd_researchers_list)

    # --- me ---
    me_p = researchers_sub.add_parser("me", help="Show the researcher registered by the caller")
    me_p.set_defaults(func=cmd_researchers_me)

    # --- proposals ---
    proposals_p = researchers_sub.add_parser("proposals", help="List proposals by a researcher")
    proposals_p.add_argument("researcher_id", type=int, help="Researcher ID")
    proposals_p.set_defaults(func=cmd_researchers_proposals)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_researchers_create(args: argparse.Namespace) -> int:
    """Register the caller as a researcher."""
    client = get_client()
    body = {
        "name": args.name,
        "address": args.address,
        "email": args.email,
        "phone": args.phone,
    }

    try:
        result = client.post("/researchers", body=body)
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_researchers_get(args: argparse.Namespace) -> int:
    """Get a researcher by ID."""
    client = get_client()
    try:
        result = client.get(f"/researchers/{args.researcher_id}")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_researchers_list(args: argparse.Namespace) -> int:
    """List all researchers."""
    client = get_client()
    try:
        result = client.get("/researchers")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_researchers_me(args: argparse.Namespace) -> int:
    """Show the researcher registered by the caller."""
    client = get_client()
    try:
        result = client.get("/researchers/me")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_researchers_proposals(args: argparse.Namespace) -> int:
    """List proposals submitted by a researcher."""
    client = get_client()
    try:
        result = client.get(f"/researchers/{args.researcher_id}/proposals")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1
