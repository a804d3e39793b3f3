# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Review commands.

Commands:
    reprofund reviews submit <proposal_id> <score> --comments ... --stake N
    reprofund reviews get <review_id>
"""

from __future__ import annotations

import argparse

from ..http_client import ReprofundAPIError, ReprofundConnectionError, get_client
from ..output import output_error, output_result


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the reviews sub-command group."""
    reviews_parser = subparsers.add_parser("reviews", help="Submit and inspect reviews")
    reviews_sub = reviews_parser.add_subparsers(dest="reviews_command", required=True)

    submit_p = reviews_sub.add_parser("submit", help="Submit a review of a proposal")
    submit_p.add_argument("proposal_id", type=int, help="Proposal ID")
    submit_p.add_argument("score", type=int, help="Review score")
    submit_p.add_argument("--comments", "-c", required=True, help="Review comments")
    submit_p.add_argument("--stake", type=int, default=0, dest="stake_amount", help="Stake amount (default 0)")
    submit_p.add_argument("--reviewer", help="Reviewer identity (defaults to the caller)")
    submit_p.set_defaults(func=cmd_reviews_submit)

    get_p = reviews_sub.add_parser("get", help="Get a review by ID")
    get_p.add_argument("review_id", type=int, help="Review ID")
    get_p.set_defaults(func=cmd_reviews_get)


def cmd_reviews_submit(args: argparse.Namespace) -> int:
    """Submit a review."""
    client = get_client()
    body: dict = {
        "proposal_id": args.proposal_id,
        "score": args.score,
        "comments": args.comments,
        "stake_amount": args.stake_amount,
    }
    if getattr(args, "reviewer", None):
        body["reviewer"] = args.reviewer

    try:
        result = client.post("/reviews", body=body)
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_reviews_get(args: argparse.Namespace) -> int:
    """Get a review by ID."""
    client = get_client()
    try:
        result = client.get(f"/reviews/{args.review_id}")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1
