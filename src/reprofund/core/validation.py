# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Input checks run before any mutation.

Each ``validate_*`` function checks one payload and raises
``InvalidPayloadError`` on the first failing check. Existence of referenced
parents is checked separately (``require_*``) so that shape errors are always
reported before lookups happen.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from .exceptions import DuplicateResearcherError, InvalidPayloadError, NotFoundError
from .ids import MAX_ID
from .models import (
    CreateMilestonePayload,
    CreateProposalPayload,
    FundProposalPayload,
    Milestone,
    ResearcherPayload,
    ResearchProposal,
    SubmitProofPayload,
    SubmitReviewPayload,
    VerifyMilestonePayload,
)

if TYPE_CHECKING:
    from ..storage.store import Store

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[0-9]{10,15}$")

MIN_NAME_LENGTH = 2
MIN_ADDRESS_LENGTH = 5


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidPayloadError(f"{field} must be a string", field=field, value=value)
    return value


def _require_non_empty(value: Any, field: str) -> str:
    if not _require_text(value, field):
        raise InvalidPayloadError(f"{field} is required", field=field)
    return value


def _require_u64(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPayloadError(f"{field} must be an integer", field=field, value=value)
    if not 0 <= value <= MAX_ID:
        raise InvalidPayloadError(f"{field} must be an unsigned 64-bit integer", field=field, value=value)
    return value


def _require_positive(value: Any, field: str) -> int:
    if _require_u64(value, field) == 0:
        raise InvalidPayloadError(f"{field} must be > 0", field=field, value=value)
    return value


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: str) -> str:
    return "".join(c for c in phone if c.isdigit())


# =============================================================================
# PAYLOAD CHECKS
# =============================================================================


def validate_researcher(payload: ResearcherPayload) -> None:
    name = _require_text(payload.name, "name")
    if len(name.strip()) < MIN_NAME_LENGTH:
        raise InvalidPayloadError("Name must be at least 2 characters long", field="name")

    address = _require_text(payload.address, "address")
    if len(address.strip()) < MIN_ADDRESS_LENGTH:
        raise InvalidPayloadError("Address must be at least 5 characters long", field="address")

    if not EMAIL_RE.match(_require_text(payload.email, "email")):
        raise InvalidPayloadError("Invalid email format", field="email")

    if not PHONE_RE.match(_require_text(payload.phone, "phone")):
        raise InvalidPayloadError("Phone number must be 10-15 digits", field="phone")


def check_researcher_unique(store: Store, payload: ResearcherPayload) -> None:
    """Reject a payload whose normalized email or phone is already registered."""
    email = normalize_email(payload.email)
    phone = normalize_phone(payload.phone)
    for researcher in store.researchers.scan():
        if researcher.email == email or researcher.phone == phone:
            raise DuplicateResearcherError(researcher.id)


def validate_proposal(payload: CreateProposalPayload) -> None:
    _require_u64(payload.researcher_id, "researcher_id")
    _require_non_empty(payload.title, "title")
    _require_non_empty(payload.description, "description")
    _require_non_empty(payload.methodology, "methodology")
    _require_positive(payload.funding_target, "funding_target")


def validate_review(payload: SubmitReviewPayload) -> None:
    _require_u64(payload.proposal_id, "proposal_id")
    _require_text(payload.reviewer, "reviewer")
    _require_positive(payload.score, "score")
    _require_non_empty(payload.comments, "comments")
    _require_positive(payload.stake_amount, "stake_amount")


def validate_funding(payload: FundProposalPayload) -> None:
    _require_u64(payload.proposal_id, "proposal_id")
    _require_positive(payload.funding_amount, "funding_amount")


def validate_milestone(payload: CreateMilestonePayload) -> None:
    _require_u64(payload.proposal_id, "proposal_id")
    _require_non_empty(payload.description, "description")
    _require_positive(payload.required_funding, "required_funding")
    _require_text(payload.deadline, "deadline")


def validate_verification(payload: VerifyMilestonePayload) -> None:
    _require_u64(payload.milestone_id, "milestone_id")


def validate_proof(payload: SubmitProofPayload) -> None:
    _require_u64(payload.milestone_id, "milestone_id")
    _require_non_empty(payload.methodology_hash, "methodology_hash")
    _require_non_empty(payload.results_hash, "results_hash")


# =============================================================================
# PARENT EXISTENCE
# =============================================================================


def require_researcher(store: Store, researcher_id: int) -> None:
    if not store.researchers.contains(researcher_id):
        raise NotFoundError("Researcher", researcher_id)


def require_proposal(store: Store, proposal_id: int) -> ResearchProposal:
    proposal = store.proposals.get(proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal", proposal_id)
    return proposal


def require_milestone(store: Store, milestone_id: int) -> Milestone:
    milestone = store.milestones.get(milestone_id)
    if milestone is None:
        raise NotFoundError("Milestone", milestone_id)
    return milestone
