# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Entity models for the research-funding store.

Dataclasses for the five entity kinds, their request payloads, and the
closed stage/status enumerations. Records convert to and from plain dicts
via ``to_dict`` / ``from_dict``; cross-references are plain integer IDs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

from .exceptions import InvalidTransitionError


class ProposalStage(StrEnum):
    """Lifecycle stage of a research proposal."""

    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


class MilestoneStatus(StrEnum):
    """Status of a milestone."""

    PENDING = "pending"
    VERIFIED = "verified"


class ProofStatus(StrEnum):
    """Status of a proof of reproduction (no transitions implemented)."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


# Allowed (current, target) pairs. Self-loops keep repeated calls idempotent.
PROPOSAL_TRANSITIONS: frozenset[tuple[ProposalStage, ProposalStage]] = frozenset(
    {
        (ProposalStage.DRAFT, ProposalStage.ACTIVE),
        (ProposalStage.ACTIVE, ProposalStage.ACTIVE),
    }
)

MILESTONE_TRANSITIONS: frozenset[tuple[MilestoneStatus, MilestoneStatus]] = frozenset(
    {
        (MilestoneStatus.PENDING, MilestoneStatus.VERIFIED),
        (MilestoneStatus.VERIFIED, MilestoneStatus.VERIFIED),
    }
)


@dataclass
class Researcher:
    """A registered researcher."""

    table: ClassVar[str] = "researchers"

    id: int
    name: str
    address: str
    email: str
    phone: str
    owner: str
    reputation_score: int = 0
    total_points: int = 0
    badges: list[str] = field(default_factory=list)
    contributions: list[str] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Researcher:
        return cls(
            id=data["id"],
            name=data["name"],
            address=data["address"],
            email=data["email"],
            phone=data["phone"],
            owner=data["owner"],
            reputation_score=data.get("reputation_score", 0),
            total_points=data.get("total_points", 0),
            badges=list(data.get("badges", [])),
            contributions=list(data.get("contributions", [])),
            achievements=list(data.get("achievements", [])),
        )


@dataclass
class ResearchProposal:
    """A funding proposal submitted by a researcher."""

    table: ClassVar[str] = "proposals"

    id: int
    researcher_id: int
    title: str
    description: str
    methodology: str
    funding_target: int
    milestones: list[int] = field(default_factory=list)
    current_funding: int = 0
    stage: ProposalStage = ProposalStage.DRAFT
    reviews: list[int] = field(default_factory=list)
    timeline: dict[str, Any] = field(default_factory=dict)

    def advance_stage(self, target: ProposalStage) -> None:
        """Move to ``target``, rejecting transitions that are not allowed."""
        if (self.stage, target) not in PROPOSAL_TRANSITIONS:
            raise InvalidTransitionError("Proposal", self.stage, target)
        self.stage = target

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["stage"] = str(self.stage)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResearchProposal:
        return cls(
            id=data["id"],
            researcher_id=data["researcher_id"],
            title=data["title"],
            description=data["description"],
            methodology=data["methodology"],
            funding_target=data["funding_target"],
            milestones=list(data.get("milestones", [])),
            current_funding=data.get("current_funding", 0),
            stage=ProposalStage(data.get("stage", ProposalStage.DRAFT)),
            reviews=list(data.get("reviews", [])),
            timeline=dict(data.get("timeline", {})),
        )


@dataclass
class Milestone:
    """A fundable unit of work belonging to exactly one proposal."""

    table: ClassVar[str] = "milestones"

    id: int
    description: str
    required_funding: int
    deadline: str
    status: MilestoneStatus = MilestoneStatus.PENDING
    proofs: list[int] = field(default_factory=list)

    def advance_status(self, target: MilestoneStatus) -> None:
        """Move to ``target``, rejecting transitions that are not allowed."""
        if (self.status, target) not in MILESTONE_TRANSITIONS:
            raise InvalidTransitionError("Milestone", self.status, target)
        self.status = target

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["status"] = str(self.status)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Milestone:
        return cls(
            id=data["id"],
            description=data["description"],
            required_funding=data["required_funding"],
            deadline=data["deadline"],
            status=MilestoneStatus(data.get("status", MilestoneStatus.PENDING)),
            proofs=list(data.get("proofs", [])),
        )


@dataclass
class Review:
    """A staked review of a proposal."""

    table: ClassVar[str] = "reviews"

    id: int
    proposal_id: int
    reviewer: str
    score: int
    comments: str
    stake_amount: int
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Review:
        return cls(
            id=data["id"],
            proposal_id=data["proposal_id"],
            reviewer=data["reviewer"],
            score=data["score"],
            comments=data["comments"],
            stake_amount=data["stake_amount"],
            verified=data.get("verified", False),
        )


@dataclass
class ProofOfReproduction:
    """Hashes attesting that a milestone's results were reproduced."""

    table: ClassVar[str] = "proofs"

    id: int
    methodology_hash: str
    results_hash: str
    status: ProofStatus = ProofStatus.PENDING

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["status"] = str(self.status)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProofOfReproduction:
        return cls(
            id=data["id"],
            methodology_hash=data["methodology_hash"],
            results_hash=data["results_hash"],
            status=ProofStatus(data.get("status", ProofStatus.PENDING)),
        )


ENTITY_TYPES: tuple[type, ...] = (Researcher, ResearchProposal, Milestone, Review, ProofOfReproduction)


# =============================================================================
# REQUEST PAYLOADS
# =============================================================================


@dataclass
class ResearcherPayload:
    name: str
    address: str
    email: str
    phone: str


@dataclass
class CreateProposalPayload:
    researcher_id: int
    title: str
    description: str
    methodology: str
    funding_target: int


@dataclass
class SubmitReviewPayload:
    proposal_id: int
    reviewer: str
    score: int
    comments: str
    stake_amount: int


@dataclass
class FundProposalPayload:
    proposal_id: int
    funding_amount: int


@dataclass
class CreateMilestonePayload:
    proposal_id: int
    description: str
    required_funding: int
    deadline: str


@dataclass
class VerifyMilestonePayload:
    # proposal_id is accepted but not consulted
    proposal_id: int
    milestone_id: int


@dataclass
class SubmitProofPayload:
    milestone_id: int
    methodology_hash: str
    results_hash: str
