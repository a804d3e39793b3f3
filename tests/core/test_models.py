"""Tests for reprofund.core.models - entities, enums and transitions."""

from __future__ import annotations

import pytest

from reprofund.core.exceptions import InvalidTransitionError
from reprofund.core.models import (
    ENTITY_TYPES,
    Milestone,
    MilestoneStatus,
    ProofOfReproduction,
    ProofStatus,
    ProposalStage,
    Researcher,
    ResearchProposal,
    Review,
)


@pytest.fixture
def proposal():
    return ResearchProposal(
        id=2,
        researcher_id=1,
        title="X",
        description="Y",
        methodology="Z",
        funding_target=1000,
    )


class TestEnums:
    def test_values(self):
        assert [s.value for s in ProposalStage] == ["draft", "active", "completed"]
        assert [s.value for s in MilestoneStatus] == ["pending", "verified"]
        assert [s.value for s in ProofStatus] == ["pending", "verified", "rejected"]

    def test_str(self):
        assert str(ProposalStage.ACTIVE) == "active"


class TestProposalTransitions:
    def test_defaults(self, proposal):
        assert proposal.stage is ProposalStage.DRAFT
        assert proposal.current_funding == 0
        assert proposal.milestones == []
        assert proposal.reviews == []

    def test_draft_to_active(self, proposal):
        proposal.advance_stage(ProposalStage.ACTIVE)
        assert proposal.stage is ProposalStage.ACTIVE

    def test_active_is_idempotent(self, proposal):
        proposal.advance_stage(ProposalStage.ACTIVE)
        proposal.advance_stage(ProposalStage.ACTIVE)
        assert proposal.stage is ProposalStage.ACTIVE

    def test_no_transition_to_completed(self, proposal):
        with pytest.raises(InvalidTransitionError):
            proposal.advance_stage(ProposalStage.COMPLETED)

    def test_no_transition_back_to_draft(self, proposal):
        proposal.advance_stage(ProposalStage.ACTIVE)
        with pytest.raises(InvalidTransitionError):
            proposal.advance_stage(ProposalStage.DRAFT)


class TestMilestoneTransitions:
    def test_pending_to_verified_and_again(self):
        milestone = Milestone(id=3, description="M1", required_funding=500, deadline="2025-01-01")
        assert milestone.status is MilestoneStatus.PENDING
        milestone.advance_status(MilestoneStatus.VERIFIED)
        milestone.advance_status(MilestoneStatus.VERIFIED)
        assert milestone.status is MilestoneStatus.VERIFIED

    def test_no_transition_back_to_pending(self):
        milestone = Milestone(id=3, description="M1", required_funding=500, deadline="d")
        milestone.advance_status(MilestoneStatus.VERIFIED)
        with pytest.raises(InvalidTransitionError):
            milestone.advance_status(MilestoneStatus.PENDING)


class TestDictConversion:
    """to_dict / from_dict reproduce each entity exactly."""

    @pytest.mark.parametrize(
        "entity",
        [
            Researcher(id=1, name="Ada", address="10 Downing St", email="a@b.co", phone="1234567890", owner="p1"),
            ResearchProposal(
                id=2,
                researcher_id=1,
                title="X",
                description="Y",
                methodology="Z",
                funding_target=1000,
                milestones=[3],
                current_funding=1100,
                stage=ProposalStage.ACTIVE,
                timeline={"milestone_created_at": 1001},
            ),
            Milestone(id=3, description="M1", required_funding=500, deadline="2025-01-01", proofs=[4]),
            Review(id=5, proposal_id=2, reviewer="p2", score=4, comments="ok", stake_amount=10),
            ProofOfReproduction(id=4, methodology_hash="hashA", results_hash="hashB"),
        ],
    )
    def test_round_trip(self, entity):
        assert type(entity).from_dict(entity.to_dict()) == entity

    def test_enums_serialise_as_strings(self, proposal):
        d = proposal.to_dict()
        assert d["stage"] == "draft"
        assert type(d["stage"]) is str

    def test_table_names(self):
        assert [model.table for model in ENTITY_TYPES] == [
            "researchers",
            "proposals",
            "milestones",
            "reviews",
            "proofs",
        ]
