"""Tests for the warden CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from warden.cli import main


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setenv("WARDEN_HOME", str(tmp_path))
    return CliRunner()


def test_check_reference_policy(runner: CliRunner) -> None:
    result = runner.invoke(main, ["check", "--exhaustive"])
    assert result.exit_code == 0
    assert "21 rules" in result.output


def test_check_broken_policy(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "broken_policy_cli.py").write_text(
        'RULES = {"user": {"todos": {"veiw": True}}, "root": {}}\n'
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setenv("WARDEN_POLICY", "broken_policy_cli:RULES")
    result = runner.invoke(main, ["check"])
    assert result.exit_code == 1
    assert "user.todos.veiw: unknown action" in result.output
    assert "root: unknown role" in result.output


def test_check_reports_undeclared(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "partial_policy_cli.py").write_text('RULES = {"user": {"todos": {"view": True}}}\n')
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setenv("WARDEN_POLICY", "partial_policy_cli:RULES")
    result = runner.invoke(main, ["check"])
    assert result.exit_code == 0
    assert "20 combinations undeclared" in result.output


def test_missing_policy_module(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WARDEN_POLICY", "no_such_policy_module:RULES")
    result = runner.invoke(main, ["check"])
    assert result.exit_code == 1
    assert "Cannot import policy module" in result.output


def test_matrix(runner: CliRunner) -> None:
    result = runner.invoke(main, ["matrix"])
    assert result.exit_code == 0
    assert "moderator" in result.output
    assert "predicate" in result.output
    assert "delete" in result.output


def test_decide_allowed(runner: CliRunner) -> None:
    data = json.dumps({"id": "3", "user_id": "1", "completed": True})
    result = runner.invoke(
        main,
        ["decide", "todos", "delete", "--role", "moderator", "--subject-id", "9", "--data", data],
    )
    assert result.exit_code == 0
    assert "Allowed via role moderator" in result.output


def test_decide_denied(runner: CliRunner) -> None:
    data = json.dumps({"id": "c1", "author_id": "2"})
    result = runner.invoke(
        main,
        [
            "decide", "comments", "view",
            "--role", "user", "--subject-id", "1", "--blocked-by", "2",
            "--data", data,
        ],
    )
    assert result.exit_code == 3
    assert "Denied" in result.output


def test_decide_without_instance(runner: CliRunner) -> None:
    result = runner.invoke(main, ["decide", "todos", "view", "--role", "user", "--subject-id", "1"])
    assert result.exit_code == 3


def test_decide_unknown_action(runner: CliRunner) -> None:
    result = runner.invoke(main, ["decide", "comments", "delete", "--role", "admin", "--subject-id", "1"])
    assert result.exit_code == 1
    assert "Unknown action" in result.output


def test_decide_bad_data(runner: CliRunner) -> None:
    result = runner.invoke(
        main,
        ["decide", "todos", "view", "--role", "user", "--subject-id", "1", "--data", '{"id": "3"}'],
    )
    assert result.exit_code == 1


def test_rbac(runner: CliRunner) -> None:
    assert runner.invoke(main, ["rbac", "moderator", "delete:comments"]).exit_code == 0
    result = runner.invoke(main, ["rbac", "user", "delete:comments"])
    assert result.exit_code == 3
    assert "denied" in result.output
