# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Milestone commands.

Commands:
    reprofund milestones create <proposal_id> <description> --funding N --deadline DATE
    reprofund milestones get <milestone_id>
    reprofund milestones verify <milestone_id>
"""

from __future__ import annotations

import argparse

from ..http_client import ReprofundAPIError, ReprofundConnectionError, get_client
from ..output import output_error, output_result


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the milestones sub-command group."""
    milestones_parser = subparsers.add_parser("milestones", help="Manage proposal milestones")
    milestones_sub = milestones_parser.add_subparsers(dest="milestones_command", required=True)

    create_p = milestones_sub.add_parser("create", help="Add a milestone to a proposal")
    create_p.add_argument("proposal_id", type=int, help="Proposal ID")
    create_p.add_argument("description", help="Milestone description")
    create_p.add_argument("--funding", type=int, required=True, dest="required_funding", help="Required funding")
    create_p.add_argument("--deadline", required=True, help="Deadline, e.g. 2025-01-01")
    create_p.set_defaults(func=cmd_milestones_create)

    get_p = milestones_sub.add_parser("get", help="Get a milestone by ID")
    get_p.add_argument("milestone_id", type=int, help="Milestone ID")
    get_p.set_defaults(func=cmd_milestones_get)

    verify_p = milestones_sub.add_parser("verify", help="Mark a milestone verified")
    verify_p.add_argument("milestone_id", type=int, help="Milestone ID")
    verify_p.set_defaults(func=cmd_milestones_verify)


def cmd_milestones_create(args: argparse.Namespace) -> int:
    """Add a milestone to a proposal."""
    client = get_client()
    body = {
        "proposal_id": args.proposal_id,
        "description": args.description,
        "required_funding": args.required_funding,
        "deadline": args.deadline,
    }

    try:
        result = client.post("/milestones", body=body)
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_milestones_get(args: argparse.Namespace) -> int:
    """Get a milestone by ID."""
    client = get_client()
    try:
        result = client.get(f"/milestones/{args.milestone_id}")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_milestones_verify(args: argparse.Namespace) -> int:
    """Mark a milestone verified."""
    client = get_client()
    try:
        result = client.post(f"/milestones/{args.milestone_id}/verify")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1
