"""
Tests for the run_advisor command-line entry point.
"""
import json

import pytest

import run_advisor
from scholarmatch.config import reset_config


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(json.dumps({"action": "score_tips", "athlete_id": "athlete-1"}), encoding="utf-8")
    return path


@pytest.fixture
def fresh_config(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.setenv("SCHOLARMATCH_AI_CHAT", "false")
    reset_config()
    yield
    reset_config()


class TestRunAdvisor:

    def test_snapshot_request(self, monkeypatch, capsys, tmp_path, request_file, fresh_config):
        snapshot = tmp_path / "snapshot.json"
        snapshot.write_text(
            json.dumps({"athletes": [{"id": "athlete-1", "first_name": "Jordan", "gpa": 3.6}]}),
            encoding="utf-8",
        )
        monkeypatch.setattr(
            "sys.argv",
            ["run_advisor.py", "--request", str(request_file), "--snapshot", str(snapshot)],
        )

        assert run_advisor.main() == 0
        assert json.loads(capsys.readouterr().out)["success"] is True

    def test_unconfigured_backend_exits_cleanly(self, monkeypatch, capsys, request_file, fresh_config):
        monkeypatch.setattr("sys.argv", ["run_advisor.py", "--request", str(request_file)])

        assert run_advisor.main() == 1
        assert capsys.readouterr().out == ""
