# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Proof-of-reproduction commands.

Commands:
    reprofund proofs submit <milestone_id> <methodology_hash> <results_hash>
    reprofund proofs get <proof_id>
"""

from __future__ import annotations

import argparse

from ..http_client import ReprofundAPIError, ReprofundConnectionError, get_client
from ..output import output_error, output_result


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the proofs sub-command group."""
    proofs_parser = subparsers.add_parser("proofs", help="Submit and inspect proofs of reproduction")
    proofs_sub = proofs_parser.add_subparsers(dest="proofs_command", required=True)

    submit_p = proofs_sub.add_parser("submit", help="Submit a proof for a milestone")
    submit_p.add_argument("milestone_id", type=int, help="Milestone ID")
    submit_p.add_argument("methodology_hash", help="Hash of the reproduction methodology")
    submit_p.add_argument("results_hash", help="Hash of the reproduction results")
    submit_p.set_defaults(func=cmd_proofs_submit)

    get_p = proofs_sub.add_parser("get", help="Get a proof by ID")
    get_p.add_argument("proof_id", type=int, help="Proof ID")
    get_p.set_defaults(func=cmd_proofs_get)


def cmd_proofs_submit(args: argparse.Namespace) -> int:
    """Submit a proof of reproduction."""
    client = get_client()
    body = {
        "milestone_id": args.milestone_id,
        "methodology_hash": args.methodology_hash,
        "results_hash": args.results_hash,
    }

    try:
        result = client.post("/proofs", body=body)
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1


def cmd_proofs_get(args: argparse.Namespace) -> int:
    """Get a proof by ID."""
    client = get_client()
    try:
        result = client.get(f"/proofs/{args.proof_id}")
        output_result(result)
        return 0
    except ReprofundConnectionError as e:
        output_error(str(e))
        return 1
    except ReprofundAPIError as e:
        output_error(e.message)
        return 1
