# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Proposal commands: create, inspect and fund research proposals.

Commands:
    reprofund proposals create <researcher_id> <title> --description ... --methodology ... --target N
    reprofund proposals get <proposal_id>
    reprofund proposals list
    reprofund proposals fund <proposal_id> <amount>
    reprofund proposals reviews <proposal_id>
"""

from __future__ import annotations

import argparse

from ..http_client import ReprofundAPIError, ReprofundConnectionError, get_client
from ..output import output_error, output_result


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the proposals sub-command group."""
    proposals_parser = subparsers.add_parser("proposals", help="Manage research proposals")
    proposals_sub = proposals_parser.add_subparsers(dest="proposals_command", required=True)

    # --- create ---
    create_p = proposals_sub.add_parser("create", help="Create a proposal in the draft stage")
    create_p.add_argument("researcher_id", type=int, help="ID of the submitting researcher")
    create_p.add_argument("title", help="Proposal title")
    create_p.add_argument("--description", "-d", required=True, help="What will be reproduced")
    create_p.add_argument("--methodology", "-m", required=True, help="How it will be reproduced")
    create_p.add_argument("--target", "-t", type=int, required=True, dest="funding_target", help="Funding target")
    create_p.set_defaults(func=cmd_proposals_create)

    # --- get ---
    get_p = proposals_sub.add_parser("get", help="Get a proposal by ID")
    get_p.add_argument("proposal_id", type=int, help="Proposal ID")
    get_p.set_defaults(func=cmd_proposals_get)

    # --- list ---
    list_p = proposals_sub.add_parser("list", help="List all proposals")
    list_p.set_defaults(func=cmd_proposals_list)

    # --- fund ---
    fund_p = proposals_sub.add_parser("fund", help="Add funding to a proposal")
    fund_p.add_argument("proposal_id", type=int, help="Proposal ID")
    fund_p.add_argument("amount", type=int, help="Funding amount (positive)")
    fund_p.set_defaults(func=cmd_proposals_fund)

    # --- reviews ---
    reviews_p = proposals_sub.add_parser("reviews", help="List reviews of a proposal")
    reviews_p.add_argument("proposal_id", type=int, help="Proposal ID")
    reviews_p.set_defaults(func=cmd_proposals_reviews)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_proposals_create(args: argparse.Namespace) -> int:
    """Create a proposal."""
    client = get_client()
    body = {
        "researcher_id": args.researcher_id,
        "title": args.title,
        "description": args.description,
        "methodology": args.methodology,
        "funding_target": args.funding_target,
    }

    try:
        result = client.post("/proposals", body=body)
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_proposals_get(args: argparse.Namespace) -> int:
    """Get a proposal by ID."""
    client = get_client()
    try:
        result = client.get(f"/proposals/{args.proposal_id}")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_proposals_list(args: argparse.Namespace) -> int:
    """List all proposals."""
    client = get_client()
    try:
        result = client.get("/proposals")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_proposals_fund(args: argparse.Namespace) -> int:
    """Add funding to a proposal."""
    client = get_client()
    try:
        result = client.post(f"/proposals/{args.proposal_id}/fund", body={"funding_amount": args.amount})
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_proposals_reviews(args: argparse.Namespace) -> int:
    """List reviews submitted for a proposal."""
    client = get_client()
    try:
        result = client.get(f"/proposals/{args.proposal_id}/reviews")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1
