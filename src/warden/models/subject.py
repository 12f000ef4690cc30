"""Subject and role models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Role(StrEnum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


class Subject(BaseModel):
    """An acting user, as supplied by the session layer.

    Roles are plain names so a subject can be checked against any registry's
    role vocabulary; names the registry does not know grant nothing.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    roles: frozenset[str] = frozenset()
    blocked_by: frozenset[str] = frozenset()  # ids of users who blocked this subject

    def has_role(self, role: StrEnum | str) -> bool:
        return str(role) in self.roles

    def with_roles(self, *roles: StrEnum | str) -> Subject:
        """Return a copy holding the given roles in addition to the current ones."""
        return self.model_copy(update={"roles": self.roles | {str(r) for r in roles}})
