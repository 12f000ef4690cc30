"""Warden: attribute-based access control decisions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from warden.core import (
    Allow,
    Decision,
    Deny,
    Evaluator,
    PolicyConfigError,
    PolicyRegistry,
    Predicate,
    UnknownVocabularyError,
)
from warden.models import Comment, ResourceType, Role, Subject, Todo
from warden.policy import EVALUATOR

__version__ = "0.1.0"


def has_permission(
    subject: Subject,
    resource_type: StrEnum | str,
    action: StrEnum | str,
    data: BaseModel | None = None,
) -> bool:
    """Check a request against the reference policy."""
    return EVALUATOR.has_permission(subject, resource_type, action, data)


__all__ = [
    "Allow",
    "Comment",
    "Decision",
    "Deny",
    "Evaluator",
    "PolicyConfigError",
    "PolicyRegistry",
    "Predicate",
    "ResourceType",
    "Role",
    "Subject",
    "Todo",
    "UnknownVocabularyError",
    "has_permission",
]
