"""Warden decision engine."""

from warden.core.evaluator import Decision, Evaluator
from warden.core.registry import PolicyConfigError, PolicyRegistry, UnknownVocabularyError
from warden.core.rules import ALLOW, DENY, Allow, Deny, PolicyRule, Predicate, coerce_rule

__all__ = [
    "ALLOW",
    "DENY",
    "Allow",
    "Decision",
    "Deny",
    "Evaluator",
    "PolicyConfigError",
    "PolicyRegistry",
    "PolicyRule",
    "Predicate",
    "UnknownVocabularyError",
    "coerce_rule",
]
