"""CLI command modules for reprofund.

Each module exposes a ``register(subparsers)`` function that wires up
its argparse sub-commands and sets ``parser.set_defaults(func=handler)``.
"""

from . import io, milestones, proofs, proposals, researchers, reviews
from .io import cmd_export
from .milestones import cmd_milestones_create, cmd_milestones_get, cmd_milestones_verify
from .proofs import cmd_proofs_get, cmd_proofs_submit
from .proposals import (
    cmd_proposals_create,
    cmd_proposals_fund,
    cmd_proposals_get,
    cmd_proposals_list,
    cmd_proposals_reviews,
)
from .researchers import (
    cmd_researchers_create,
    cmd_researchers_get,
    cmd_researchers_list,
    cmd_researchers_me,
    cmd_researchers_proposals,
)
from .reviews import cmd_reviews_get, cmd_reviews_submit

# All command modules with register() functions, in registration order.
COMMAND_MODULES = [
    researchers,
    proposals,
    reviews,
    milestones,
    proofs,
    io,
]

__all__ = [
    "COMMAND_MODULES",
    "cmd_export",
    "cmd_milestones_create",
    "cmd_milestones_get",
    "cmd_milestones_verify",
    "cmd_proofs_get",
    "cmd_proofs_submit",
    "cmd_proposals_create",
    "cmd_proposals_fund",
    "cmd_proposals_get",
    "cmd_proposals_list",
    "cmd_proposals_reviews",
    "cmd_researchers_create",
    "cmd_researchers_get",
    "cmd_researchers_list",
    "cmd_researchers_me",
    "cmd_researchers_proposals",
    "cmd_reviews_get",
    "cmd_reviews_submit",
]
