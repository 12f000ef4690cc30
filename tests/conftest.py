"""Shared test fixtures for Warden."""

from __future__ import annotations

import pytest

from warden.core.evaluator import Evaluator
from warden.models import Comment, Subject, Todo
from warden.policy import REGISTRY


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WARDEN_HOME", "WARDEN_LOG_LEVEL", "WARDEN_POLICY", "WARDEN_EXHAUSTIVE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def evaluator() -> Evaluator:
    return Evaluator(REGISTRY)


@pytest.fixture
def user() -> Subject:
    return Subject(id="1", roles=["user"], blocked_by=["2"])


@pytest.fixture
def moderator() -> Subject:
    return Subject(id="7", roles=["moderator"])


@pytest.fixture
def admin() -> Subject:
    return Subject(id="8", roles=["admin"])


@pytest.fixture
def todo() -> Todo:
    return Todo(id="3", title="Test Todo", user_id="1", completed=False)


@pytest.fixture
def comment() -> Comment:
    return Comment(id="c1", body="Nice", author_id="3")
