"""Policy rule variants: Allow, Deny and Predicate."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from warden.models.subject import Subject

Check = Callable[[Subject, Any], bool]


@dataclass(frozen=True)
class Allow:
    """Grants unconditionally."""

    kind = "allow"


@dataclass(frozen=True)
class Deny:
    """Grants nothing. Equivalent to an absent rule; does not veto other roles."""

    kind = "deny"


@dataclass(frozen=True)
class Predicate:
    """Grants when ``check(subject, data)`` is true.

    The check must be pure: no I/O and no mutation of its arguments. It is
    only called with a resource instance; without one it grants nothing.
    """

    check: Check
    kind = "predicate"

    def __call__(self, subject: Subject, data: BaseModel) -> bool:
        return bool(self.check(subject, data))


PolicyRule = Allow | Deny | Predicate

ALLOW = Allow()
DENY = Deny()


def coerce_rule(value: Any) -> PolicyRule:
    """Turn declaration shorthand into a rule.

    ``True`` -> Allow, ``False`` -> Deny, any other callable -> Predicate.
    Raises TypeError for anything else.
    """
    if isinstance(value, Allow | Deny | Predicate):
        return value
    if value is True:
        return ALLOW
    if value is False:
        return DENY
    if callable(value):
        return Predicate(value)
    raise TypeError(f"expected bool, callable or rule, got {type(value).__name__}")
