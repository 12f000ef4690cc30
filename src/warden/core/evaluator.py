"""Decision evaluator: OR of per-role verdicts over the policy registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel

from warden.core.registry import PolicyRegistry
from warden.core.rules import Allow, Deny, Predicate
from warden.models.subject import Subject


@dataclass(frozen=True)
class Decision:
    """Outcome of one request, with the role and rule kind that granted it."""

    allowed: bool
    role: StrEnum | None = None
    rule: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


DENIED = Decision(allowed=False)


class Evaluator:
    """Answers permission requests against a fixed registry.

    Evaluation is pure: it never mutates its inputs and performs no I/O, so
    one evaluator may be shared freely across threads.
    """

    def __init__(self, registry: PolicyRegistry) -> None:
        self.registry = registry

    def decide(
        self,
        subject: Subject,
        resource_type: StrEnum | str,
        action: StrEnum | str,
        data: BaseModel | None = None,
    ) -> Decision:
        resource, act = self.registry.normalize(resource_type, action)
        if data is not None:
            expected = self.registry.spec_for(resource).data_type
            if not isinstance(data, expected):
                raise TypeError(
                    f"{resource} expects {expected.__name__} data, got {type(data).__name__}"
                )

        for name in subject.roles:
            # Roles from another vocabulary grant nothing here.
            role = self.registry.role_for(name)
            if role is None:
                continue
            rule = self.registry.lookup(role, resource, act)
            match rule:
                case None | Deny():
                    continue
                case Allow():
                    return Decision(allowed=True, role=role, rule=rule.kind)
                case Predicate():
                    # A predicate cannot be confirmed without the instance.
                    if data is not None and rule(subject, data):
                        return Decision(allowed=True, role=role, rule=rule.kind)
        return DENIED

    def has_permission(
        self,
        subject: Subject,
        resource_type: StrEnum | str,
        action: StrEnum | str,
        data: BaseModel | None = None,
    ) -> bool:
        """Return True if any of the subject's roles grants the action."""
        return self.decide(subject, resource_type, action, data).allowed

    def permitted_actions(
        self,
        subject: Subject,
        resource_type: StrEnum | str,
        data: BaseModel | None = None,
    ) -> list[StrEnum]:
        """List the actions on a resource type the subject may perform."""
        spec = self.registry.spec_for(resource_type)
        return [
            action
            for action in spec.actions
            if self.has_permission(subject, resource_type, action, data)
        ]
