"""Policy registry: validated, read-only Role -> ResourceType -> Action -> rule table."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from warden.core.rules import PolicyRule, coerce_rule
from warden.models.resource import RESOURCES, ResourceSpec, ResourceType
from warden.models.subject import Role

logger = logging.getLogger(__name__)

Declaration = Mapping[Any, Mapping[Any, Mapping[Any, Any]]]


class PolicyConfigError(ValueError):
    """Raised when a policy declaration does not match the vocabulary."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(
            f"Invalid policy declaration ({len(errors)} error(s)):\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


class UnknownVocabularyError(ValueError):
    """Raised when a lookup names a role, resource type or action outside the vocabulary."""


class PolicyRegistry:
    """Immutable policy table, built and validated once at startup.

    Absent entries mean "not granted". Keys that are not members of the
    role, resource-type or per-type action enumerations are rejected.
    """

    def __init__(
        self,
        declaration: Declaration,
        *,
        roles: type[StrEnum] = Role,
        resources: Mapping[StrEnum, ResourceSpec] = RESOURCES,
        exhaustive: bool = False,
    ) -> None:
        self._roles = roles
        self._resources = MappingProxyType(dict(resources))
        self._resource_enum = type(next(iter(resources))) if resources else ResourceType

        errors: list[str] = []
        table = self._build(declaration, errors)
        if exhaustive and not errors:
            errors.extend(
                f"{role}.{resource}.{action}: not declared"
                for role, resource, action in self._missing_from(table)
            )
        if errors:
            for error in errors:
                logger.error("Policy declaration error: %s", error)
            raise PolicyConfigError(errors)

        self._table = MappingProxyType(
            {
                role: MappingProxyType(
                    {resource: MappingProxyType(actions) for resource, actions in per_role.items()}
                )
                for role, per_role in table.items()
            }
        )
        logger.debug("Policy registry built with %d rules", sum(1 for _ in self.entries()))

    def _build(self, declaration: Declaration, errors: list[str]) -> dict:
        table: dict[StrEnum, dict[StrEnum, dict[StrEnum, PolicyRule]]] = {}
        if not isinstance(declaration, Mapping):
            errors.append(f"declaration must be a mapping, got {type(declaration).__name__}")
            return table

        for role_key, per_role in declaration.items():
            try:
                role = self._roles(role_key)
            except ValueError:
                errors.append(f"{role_key}: unknown role")
                continue
            if not isinstance(per_role, Mapping):
                errors.append(f"{role}: expected a mapping of resource types")
                continue
            table[role] = {}

            for resource_key, per_resource in per_role.items():
                try:
                    resource = self._resource_enum(resource_key)
                    spec = self._resources[resource]
                except (ValueError, KeyError):
                    errors.append(f"{role}.{resource_key}: unknown resource type")
                    continue
                if not isinstance(per_resource, Mapping):
                    errors.append(f"{role}.{resource}: expected a mapping of actions")
                    continue
                actions = table[role][resource] = {}

                for action_key, value in per_resource.items():
                    try:
                        action = spec.action(action_key)
                    except ValueError:
                        errors.append(
                            f"{role}.{resource}.{action_key}: unknown action"
                            f" (expected one of {', '.join(spec.actions)})"
                        )
                        continue
                    try:
                        actions[action] = coerce_rule(value)
                    except TypeError as e:
                        errors.append(f"{role}.{resource}.{action}: {e}")
        return table

    def _missing_from(self, table: Mapping) -> Iterator[tuple[StrEnum, StrEnum, StrEnum]]:
        for role in self._roles:
            for resource, spec in self._resources.items():
                declared = table.get(role, {}).get(resource, {})
                for action in spec.actions:
                    if action not in declared:
                        yield role, resource, action

    @property
    def roles(self) -> type[StrEnum]:
        return self._roles

    @property
    def resources(self) -> Mapping[StrEnum, ResourceSpec]:
        return self._resources

    def spec_for(self, resource_type: StrEnum | str) -> ResourceSpec:
        try:
            return self._resources[self._resource_enum(resource_type)]
        except (ValueError, KeyError) as e:
            raise UnknownVocabularyError(f"Unknown resource type: {resource_type!r}") from e

    def normalize(
        self, resource_type: StrEnum | str, action: StrEnum | str
    ) -> tuple[StrEnum, StrEnum]:
        """Resolve string keys to the vocabulary's enum members."""
        spec = self.spec_for(resource_type)
        try:
            return self._resource_enum(resource_type), spec.action(action)
        except ValueError as e:
            raise UnknownVocabularyError(
                f"Unknown action {action!r} for {resource_type}"
                f" (expected one of {', '.join(spec.actions)})"
            ) from e

    def role_for(self, value: StrEnum | str) -> StrEnum | None:
        """Resolve a role name to the vocabulary member, or None if it is not one."""
        try:
            return self._roles(value)
        except ValueError:
            return None

    def lookup(
        self, role: StrEnum | str, resource_type: StrEnum | str, action: StrEnum | str
    ) -> PolicyRule | None:
        """Return the rule for the triple, or None when the role has none."""
        resource, act = self.normalize(resource_type, action)
        try:
            role = self._roles(role)
        except ValueError as e:
            raise UnknownVocabularyError(f"Unknown role: {role!r}") from e
        return self._table.get(role, {}).get(resource, {}).get(act)

    def entries(self) -> Iterator[tuple[StrEnum, StrEnum, StrEnum, PolicyRule]]:
        """Iterate every declared rule as (role, resource_type, action, rule)."""
        for role, per_role in self._table.items():
            for resource, actions in per_role.items():
                for action, rule in actions.items():
                    yield role, resource, action, rule

    def missing(self) -> list[tuple[StrEnum, StrEnum, StrEnum]]:
        """List the (role, resource_type, action) combinations with no rule."""
        return list(self._missing_from(self._table))

    def __repr__(self) -> str:
        return f"PolicyRegistry(roles={[r.value for r in self._roles]}, rules={len(list(self.entries()))})"
