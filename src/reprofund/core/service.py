# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""The operation surface of the research-funding store.

``FundingService`` exposes every create, mutate and query operation. Each
operation:

1. runs inside one store transaction (serialized, all-or-nothing);
2. validates its payload before touching any table;
3. returns a ``FundingResponse`` -- failures are never raised to the caller.

Usage::

    store = build_store()
    service = FundingService(store)
    resp = service.create_researcher(ResearcherPayload(...), caller="principal-1")
    if resp.success:
        researcher = resp.data
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from typing import Any, TypeVar

from ..storage.store import Store
from .exceptions import ReprofundException
from .linkage import LinkageManager
from .logging import operation_logger
from .models import (
    CreateMilestonePayload,
    CreateProposalPayload,
    FundProposalPayload,
    Milestone,
    ProofOfReproduction,
    Researcher,
    ResearcherPayload,
    ResearchProposal,
    Review,
    SubmitProofPayload,
    SubmitReviewPayload,
    VerifyMilestonePayload,
)
from .queries import QueryFacade
from .response import FundingResponse, MessageKind, err, ok
from .validation import (
    check_researcher_unique,
    normalize_email,
    normalize_phone,
    require_milestone,
    require_proposal,
    require_researcher,
    validate_funding,
    validate_milestone,
    validate_proof,
    validate_proposal,
    validate_researcher,
    validate_review,
    validate_verification,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _describe(args: tuple, kwargs: dict) -> dict[str, Any]:
    described: dict[str, Any] = {}
    for i, arg in enumerate(args):
        described[f"arg{i}"] = asdict(arg) if is_dataclass(arg) else arg
    for key, value in kwargs.items():
        described[key] = asdict(value) if is_dataclass(value) else value
    return described


def operation(func: F) -> F:
    """Run a service method in a transaction and wrap its outcome in a FundingResponse."""
    name = func.__name__

    @functools.wraps(func)
    def wrapper(self: FundingService, *args: Any, **kwargs: Any) -> FundingResponse:
        operation_logger.log_call(name, _describe(args, kwargs))
        start = time.perf_counter()
        try:
            with self.store.transaction():
                data = func(self, *args, **kwargs)
            response = ok(data)
        except ReprofundException as e:
            if e.kind is MessageKind.ERROR:
                logger.error("%s failed: %s", name, e.message)
            response = err(e.kind, e.message)
        except Exception:
            logger.exception("Unexpected error in %s", name)
            response = err(MessageKind.ERROR, f"Internal error in {name}")
        operation_logger.log_result(name, str(response.kind), (time.perf_counter() - start) * 1000)
        return response

    return wrapper  # type: ignore[return-value]


class FundingService:
    """All operations over researchers, proposals, reviews, milestones and proofs."""

    def __init__(
        self,
        store: Store,
        clock: Callable[[], int] = time.time_ns,
        anonymous_caller: str = "anonymous",
    ):
        self.store = store
        self.clock = clock
        self.anonymous_caller = anonymous_caller
        self.linkage = LinkageManager(store, clock=clock)
        self.queries = QueryFacade(store)

    # =========================================================================
    # Researchers
    # =========================================================================

    @operation
    def create_researcher(self, payload: ResearcherPayload, caller: str | None = None) -> Researcher:
        validate_researcher(payload)
        check_researcher_unique(self.store, payload)

        researcher = Researcher(
            id=self.store.ids.next_id(),
            name=payload.name.strip(),
            address=payload.address.strip(),
            email=normalize_email(payload.email),
            phone=normalize_phone(payload.phone),
            owner=caller or self.anonymous_caller,
        )
        self.store.researchers.put(researcher.id, researcher)
        logger.info("Created researcher %d", researcher.id)
        return researcher

    @operation
    def get_researcher_by_id(self, researcher_id: int) -> Researcher:
        return self.queries.researcher(researcher_id)

    @operation
    def get_all_researchers(self) -> list[Researcher]:
        return self.queries.all_researchers()

    @operation
    def get_researcher_by_owner(self, caller: str | None = None) -> Researcher:
        return self.queries.researcher_by_owner(caller or self.anonymous_caller)

    # =========================================================================
    # Proposals
    # =========================================================================

    @operation
    def create_proposal(self, payload: CreateProposalPayload) -> ResearchProposal:
        validate_proposal(payload)
        require_researcher(self.store, payload.researcher_id)

        proposal = ResearchProposal(
            id=self.store.ids.next_id(),
            researcher_id=payload.researcher_id,
            title=payload.title,
            description=payload.description,
            methodology=payload.methodology,
            funding_target=payload.funding_target,
            timeline={"created_at": self.clock()},
        )
        self.store.proposals.put(proposal.id, proposal)
        logger.info("Created proposal %d for researcher %d", proposal.id, proposal.researcher_id)
        return proposal

    @operation
    def get_proposal_by_id(self, proposal_id: int) -> ResearchProposal:
        return self.queries.proposal(proposal_id)

    @operation
    def get_all_proposals(self) -> list[ResearchProposal]:
        return self.queries.all_proposals()

    @operation
    def get_proposals_by_researcher_id(self, researcher_id: int) -> list[ResearchProposal]:
        return self.queries.proposals_by_researcher(researcher_id)

    @operation
    def fund_proposal(self, payload: FundProposalPayload) -> ResearchProposal:
        validate_funding(payload)
        proposal = self.linkage.add_funding(payload.proposal_id, payload.funding_amount)
        logger.info("Funded proposal %d with %d (total %d)", proposal.id, payload.funding_amount, proposal.current_funding)
        return proposal

    # =========================================================================
    # Reviews
    # =========================================================================

    @operation
    def submit_review(self, payload: SubmitReviewPayload) -> Review:
        validate_review(payload)
        require_proposal(self.store, payload.proposal_id)

        # Not appended to Proposal.reviews; see DESIGN.md.
        review = Review(
            id=self.store.ids.next_id(),
            proposal_id=payload.proposal_id,
            reviewer=payload.reviewer,
            score=payload.score,
            comments=payload.comments,
            stake_amount=payload.stake_amount,
        )
        self.store.reviews.put(review.id, review)
        logger.info("Submitted review %d for proposal %d", review.id, review.proposal_id)
        return review

    @operation
    def get_review_by_id(self, review_id: int) -> Review:
        return self.queries.review(review_id)

    @operation
    def get_reviews_by_proposal_id(self, proposal_id: int) -> list[Review]:
        return self.queries.reviews_by_proposal(proposal_id)

    # =========================================================================
    # Milestones
    # =========================================================================

    @operation
    def create_milestone(self, payload: CreateMilestonePayload) -> Milestone:
        validate_milestone(payload)
        require_proposal(self.store, payload.proposal_id)

        milestone = Milestone(
            id=self.store.ids.next_id(),
            description=payload.description,
            required_funding=payload.required_funding,
            deadline=payload.deadline,
        )
        self.store.milestones.put(milestone.id, milestone)
        self.linkage.link_milestone(payload.proposal_id, milestone)
        logger.info("Created milestone %d for proposal %d", milestone.id, payload.proposal_id)
        return milestone

    @operation
    def get_milestone_by_id(self, milestone_id: int) -> Milestone:
        return self.queries.milestone(milestone_id)

    @operation
    def verify_milestone(self, payload: VerifyMilestonePayload) -> Milestone:
        validate_verification(payload)
        milestone = self.linkage.verify_milestone(payload.milestone_id)
        logger.info("Verified milestone %d", milestone.id)
        return milestone

    # =========================================================================
    # Proofs
    # =========================================================================

    @operation
    def submit_proof(self, payload: SubmitProofPayload) -> ProofOfReproduction:
        validate_proof(payload)
        require_milestone(self.store, payload.milestone_id)

        proof = ProofOfReproduction(
            id=self.store.ids.next_id(),
            methodology_hash=payload.methodology_hash,
            results_hash=payload.results_hash,
        )
        self.store.proofs.put(proof.id, proof)
        self.linkage.link_proof(payload.milestone_id, proof)
        logger.info("Submitted proof %d for milestone %d", proof.id, payload.milestone_id)
        return proof

    @operation
    def get_proof_by_id(self, proof_id: int) -> ProofOfReproduction:
        return self.queries.proof(proof_id)

    # =========================================================================
    # Snapshots
    # =========================================================================

    @operation
    def export_snapshot(self) -> dict[str, Any]:
        return self.store.export_snapshot()

    @operation
    def import_snapshot(self, snapshot: dict[str, Any]) -> dict[str, Any]:
        self.store.import_snapshot(snapshot)
        return {"counter": self.store.read_counter()}
