"""Tests for reprofund.cli.output."""

from __future__ import annotations

import json

from reprofund.cli.output import format_text, output_error, output_result


class TestOutputResult:
    def test_json(self, capsys):
        output_result({"success": True, "data": {"id": 1}}, output_format="json")
        assert json.loads(capsys.readouterr().out) == {"success": True, "data": {"id": 1}}

    def test_text_record(self, capsys):
        output_result({"success": True, "data": {"id": 3, "proofs": [4]}}, output_format="text")
        assert capsys.readouterr().out == "id: 3\nproofs: [4]\n"

    def test_text_list(self):
        assert format_text([{"id": 1}, {"id": 2}]) == "id: 1\n\nid: 2"

    def test_formatted_passthrough(self, capsys):
        output_result({"formatted": "hello"}, output_format="text")
        assert capsys.readouterr().out == "hello\n"

    def test_uses_configured_format(self, capsys):
        output_result({"success": True, "data": {"id": 1}})
        assert json.loads(capsys.readouterr().out)["data"] == {"id": 1}


class TestOutputError:
    def test_to_stderr(self, capsys):
        output_error("boom")
        assert capsys.readouterr().err == "Error: boom\n"
