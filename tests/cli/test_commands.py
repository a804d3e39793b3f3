"""Tests for the CLI command modules."""

from __future__ import annotations

import argparse
import json
from unittest.mock import MagicMock, patch

import pytest

from reprofund.cli.commands import COMMAND_MODULES
from reprofund.cli.commands.io import cmd_export
from reprofund.cli.commands.milestones import cmd_milestones_create, cmd_milestones_verify
from reprofund.cli.commands.proofs import cmd_proofs_get, cmd_proofs_submit
from reprofund.cli.commands.proposals import cmd_proposals_create, cmd_proposals_fund, cmd_proposals_reviews
from reprofund.cli.commands.researchers import cmd_researchers_create, cmd_researchers_get, cmd_researchers_me
from reprofund.cli.commands.reviews import cmd_reviews_submit
from reprofund.cli.http_client import ReprofundAPIError, ReprofundConnectionError


@pytest.fixture
def parser():
    parser = argparse.ArgumentParser()
    subparsers = parser.add_subparsers(dest="command", required=True)
    for module in COMMAND_MODULES:
        module.register(subparsers)
    return parser


class TestRegistration:
    """Every command group parses its sub-commands."""

    def test_researchers(self, parser):
        args = parser.parse_args(["researchers", "create", "Ada", "10 Downing St", "ada@example.com", "1234567890"])
        assert args.researchers_command == "create"
        assert args.func is cmd_researchers_create
        assert args.email == "ada@example.com"

        args = parser.parse_args(["researchers", "get", "1"])
        assert args.researcher_id == 1

    def test_proposals(self, parser):
        args = parser.parse_args(["proposals", "create", "1", "X", "-d", "Y", "-m", "Z", "-t", "1000"])
        assert args.funding_target == 1000
        assert args.func is cmd_proposals_create

        args = parser.parse_args(["proposals", "fund", "2", "400"])
        assert (args.proposal_id, args.amount) == (2, 400)

    def test_milestones(self, parser):
        args = parser.parse_args(["milestones", "create", "2", "M1", "--funding", "500", "--deadline", "2025-01-01"])
        assert args.required_funding == 500
        assert args.deadline == "2025-01-01"

    def test_reviews_and_proofs(self, parser):
        args = parser.parse_args(["reviews", "submit", "2", "4", "-c", "solid", "--stake", "10"])
        assert (args.score, args.stake_amount) == (4, 10)

        args = parser.parse_args(["proofs", "submit", "3", "hashA", "hashB"])
        assert args.func is cmd_proofs_submit

    def test_export(self, parser):
        args = parser.parse_args(["export", "-o", "snap.json"])
        assert args.output_file == "snap.json"

    def test_non_integer_id_rejected(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["proofs", "get", "abc"])


class TestResearcherCommands:
    @patch("reprofund.cli.commands.researchers.get_client")
    def test_create(self, mock_get_client):
        mock_client = MagicMock()
        mock_get_client.return_value = mock_client
        mock_client.post.return_value = {"success": True, "data": {"id": 1}}

        args = MagicMock(name="args")
        args.name = "Ada"
        args.address = "10 Downing St"
        args.email = "ada@example.com"
        args.phone = "1234567890"

        assert cmd_researchers_create(args) == 0
        path = mock_client.post.call_args[0][0]
        body = mock_client.post.call_args[1]["body"]
        assert path == "/researchers"
        assert body == {"name": "Ada", "address": "10 Downing St", "email": "ada@example.com", "phone": "1234567890"}

    @patch("reprofund.cli.commands.researchers.get_client")
    def test_get_not_found(self, mock_get_client, capsys):
        mock_get_client.return_value.get.side_effect = ReprofundAPIError(
            404, "NOT_FOUND_RESOURCE", "Researcher with id=7 not found"
        )
        assert cmd_researchers_get(MagicMock(researcher_id=7)) == 1
        assert "Researcher with id=7 not found" in capsys.readouterr().err

    @patch("reprofund.cli.commands.researchers.get_client")
    def test_me_connection_error(self, mock_get_client, capsys):
        mock_get_client.return_value.get.side_effect = ReprofundConnectionError("http://test:8430")
        assert cmd_researchers_me(MagicMock()) == 1
        assert "Cannot connect" in capsys.readouterr().err


class TestProposalCommands:
    @patch("reprofund.cli.commands.proposals.get_client")
    def test_create(self, mock_get_client):
        mock_client = mock_get_client.return_value
        mock_client.post.return_value = {"success": True, "data": {"id": 2}}
        args = MagicMock(researcher_id=1, title="X", description="Y", methodology="Z", funding_target=1000)

        assert cmd_proposals_create(args) == 0
        assert mock_client.post.call_args[1]["body"]["funding_target"] == 1000

    @patch("reprofund.cli.commands.proposals.get_client")
    def test_fund(self, mock_get_client):
        mock_client = mock_get_client.return_value
        mock_client.post.return_value = {"success": True, "data": {"current_funding": 400}}

        assert cmd_proposals_fund(MagicMock(proposal_id=2, amount=400)) == 0
        mock_client.post.assert_called_once_with("/proposals/2/fund", body={"funding_amount": 400})

    @patch("reprofund.cli.commands.proposals.get_client")
    def test_reviews(self, mock_get_client):
        mock_get_client.return_value.get.return_value = {"success": True, "data": []}
        assert cmd_proposals_reviews(MagicMock(proposal_id=2)) == 0
        mock_get_client.return_value.get.assert_called_once_with("/proposals/2/reviews")


class TestReviewCommands:
    @patch("reprofund.cli.commands.reviews.get_client")
    def test_submit_without_reviewer(self, mock_get_client):
        mock_client = mock_get_client.return_value
        mock_client.post.return_value = {"success": True, "data": {"id": 3}}
        args = MagicMock(proposal_id=2, score=4, comments="solid", stake_amount=10, reviewer=None)

        assert cmd_reviews_submit(args) == 0
        assert "reviewer" not in mock_client.post.call_args[1]["body"]

    @patch("reprofund.cli.commands.reviews.get_client")
    def test_submit_with_reviewer(self, mock_get_client):
        mock_client = mock_get_client.return_value
        mock_client.post.return_value = {"success": True, "data": {"id": 3}}
        args = MagicMock(proposal_id=2, score=4, comments="solid", stake_amount=10, reviewer="carol")

        cmd_reviews_submit(args)
        assert mock_client.post.call_args[1]["body"]["reviewer"] == "carol"


class TestMilestoneAndProofCommands:
    @patch("reprofund.cli.commands.milestones.get_client")
    def test_create(self, mock_get_client):
        mock_client = mock_get_client.return_value
        mock_client.post.return_value = {"success": True, "data": {"id": 3}}
        args = MagicMock(proposal_id=2, description="M1", required_funding=500, deadline="2025-01-01")

        assert cmd_milestones_create(args) == 0
        assert mock_client.post.call_args[1]["body"]["deadline"] == "2025-01-01"

    @patch("reprofund.cli.commands.milestones.get_client")
    def test_verify(self, mock_get_client):
        mock_get_client.return_value.post.return_value = {"success": True, "data": {"status": "verified"}}
        assert cmd_milestones_verify(MagicMock(milestone_id=3)) == 0
        mock_get_client.return_value.post.assert_called_once_with("/milestones/3/verify")

    @patch("reprofund.cli.commands.proofs.get_client")
    def test_proof_get_error(self, mock_get_client):
        mock_get_client.return_value.get.side_effect = ReprofundAPIError(404, "NOT_FOUND_RESOURCE", "missing")
        assert cmd_proofs_get(MagicMock(proof_id=4)) == 1


class TestExportCommand:
    @patch("reprofund.cli.commands.io.get_client")
    def test_to_stdout(self, mock_get_client, capsys):
        mock_get_client.return_value.get.return_value = {"success": True, "data": {"counter": 0, "tables": {}}}
        assert cmd_export(MagicMock(output_file=None)) == 0
        assert json.loads(capsys.readouterr().out)["data"]["counter"] == 0

    @patch("reprofund.cli.commands.io.get_client")
    def test_to_file(self, mock_get_client, tmp_path, capsys):
        snapshot = {"counter": 2, "tables": {"researchers": [{"id": 1}], "proposals": [{"id": 2}]}}
        mock_get_client.return_value.get.return_value = {"success": True, "data": snapshot}
        target = tmp_path / "snap.json"

        assert cmd_export(MagicMock(output_file=str(target))) == 0
        assert json.loads(target.read_text()) == snapshot
        assert "Exported 2 records (counter=2)" in capsys.readouterr().out

    @patch("reprofund.cli.commands.io.get_client")
    def test_unwritable_file(self, mock_get_client, tmp_path):
        mock_get_client.return_value.get.return_value = {"success": True, "data": {"counter": 0, "tables": {}}}
        assert cmd_export(MagicMock(output_file=str(tmp_path / "missing" / "snap.json"))) == 1
