# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Parent/child linkage between entities.

Keeps the ID lists held by parents (Proposal.milestones, Milestone.proofs)
in step with child creation, and applies the parent-side effects of funding
and milestone verification. Every method re-reads the parent, modifies the
copy, and writes it back inside the caller's transaction; if any step fails,
the whole transaction (including the child write) is discarded.

Review submission deliberately does not append to Proposal.reviews.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from .exceptions import InvalidPayloadError, NotFoundError
from .ids import MAX_ID
from .models import Milestone, MilestoneStatus, ProofOfReproduction, ProposalStage, ResearchProposal

if TYPE_CHECKING:
    from ..storage.store import Store

logger = logging.getLogger(__name__)


class LinkageManager:
    """Applies parent updates that accompany child writes."""

    def __init__(self, store: Store, clock: Callable[[], int] = time.time_ns):
        self._store = store
        self._clock = clock

    def _proposal(self, proposal_id: int) -> ResearchProposal:
        proposal = self._store.proposals.get(proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal", proposal_id)
        return proposal

    def _milestone(self, milestone_id: int) -> Milestone:
        milestone = self._store.milestones.get(milestone_id)
        if milestone is None:
            raise NotFoundError("Milestone", milestone_id)
        return milestone

    def link_milestone(self, proposal_id: int, milestone: Milestone) -> ResearchProposal:
        """Attach a persisted milestone to its proposal and activate the proposal.

        The proposal's timeline is replaced, not merged.
        """
        with self._store.transaction():
            proposal = self._proposal(proposal_id)
            if milestone.id not in proposal.milestones:
                proposal.milestones.append(milestone.id)
            proposal.advance_stage(ProposalStage.ACTIVE)
            proposal.timeline = {"milestone_created_at": self._clock()}
            self._store.proposals.put(proposal.id, proposal)
        logger.debug("Linked milestone %d to proposal %d", milestone.id, proposal_id)
        return proposal

    def link_proof(self, milestone_id: int, proof: ProofOfReproduction) -> Milestone:
        """Attach a persisted proof to its milestone."""
        with self._store.transaction():
            milestone = self._milestone(milestone_id)
            if proof.id not in milestone.proofs:
                milestone.proofs.append(proof.id)
            self._store.milestones.put(milestone.id, milestone)
        logger.debug("Linked proof %d to milestone %d", proof.id, milestone_id)
        return milestone

    def add_funding(self, proposal_id: int, amount: int) -> ResearchProposal:
        """Add ``amount`` to the proposal's current funding.

        Funding beyond the target is allowed; leaving the u64 range is not.
        """
        with self._store.transaction():
            proposal = self._proposal(proposal_id)
            total = proposal.current_funding + amount
            if total > MAX_ID:
                raise InvalidPayloadError("Funding total would overflow", field="funding_amount", value=amount)
            proposal.current_funding = total
            self._store.proposals.put(proposal.id, proposal)
        return proposal

    def verify_milestone(self, milestone_id: int) -> Milestone:
        """Mark the milestone verified, regardless of funding received."""
        with self._store.transaction():
            milestone = self._milestone(milestone_id)
            milestone.advance_status(MilestoneStatus.VERIFIED)
            self._store.milestones.put(milestone.id, milestone)
        return milestone
