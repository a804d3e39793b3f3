# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Read-only lookups over the entity tables.

Every query either returns what it found or raises ``NotFoundError``; an
empty result set is reported the same way as a missing ID.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import NotFoundError
from .models import Milestone, ProofOfReproduction, Researcher, ResearchProposal, Review

if TYPE_CHECKING:
    from ..storage.store import EntityTable, Store


def _by_id(table: EntityTable, kind: str, key: int):
    record = table.get(key)
    if record is None:
        raise NotFoundError(kind, key)
    return record


class QueryFacade:
    """Lookups by ID, by parent ID, by owner, and full scans."""

    def __init__(self, store: Store):
        self._store = store

    def researcher(self, researcher_id: int) -> Researcher:
        return _by_id(self._store.researchers, "Researcher", researcher_id)

    def proposal(self, proposal_id: int) -> ResearchProposal:
        return _by_id(self._store.proposals, "Proposal", proposal_id)

    def milestone(self, milestone_id: int) -> Milestone:
        return _by_id(self._store.milestones, "Milestone", milestone_id)

    def review(self, review_id: int) -> Review:
        return _by_id(self._store.reviews, "Review", review_id)

    def proof(self, proof_id: int) -> ProofOfReproduction:
        return _by_id(self._store.proofs, "Proof", proof_id)

    def all_researchers(self) -> list[Researcher]:
        researchers = self._store.researchers.scan()
        if not researchers:
            raise NotFoundError.empty("Researcher", "No researchers found")
        return researchers

    def all_proposals(self) -> list[ResearchProposal]:
        proposals = self._store.proposals.scan()
        if not proposals:
            raise NotFoundError.empty("Proposal", "No proposals found")
        return proposals

    def proposals_by_researcher(self, researcher_id: int) -> list[ResearchProposal]:
        proposals = [p for p in self._store.proposals.scan() if p.researcher_id == researcher_id]
        if not proposals:
            raise NotFoundError.empty("Proposal", f"No proposals found for researcher_id={researcher_id}")
        return proposals

    def reviews_by_proposal(self, proposal_id: int) -> list[Review]:
        reviews = [r for r in self._store.reviews.scan() if r.proposal_id == proposal_id]
        if not reviews:
            raise NotFoundError.empty("Review", f"No reviews found for proposal_id={proposal_id}")
        return reviews

    def researcher_by_owner(self, owner: str) -> Researcher:
        for researcher in self._store.researchers.scan():
            if researcher.owner == owner:
                return researcher
        raise NotFoundError("Researcher", owner, message=f"Researcher with owner={owner} not found")
