"""Resource types, their action vocabularies and instance models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class ResourceType(StrEnum):
    COMMENTS = "comments"
    TODOS = "todos"


class CommentAction(StrEnum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"


class TodoAction(StrEnum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Comment(BaseModel):
    """A comment left by a user."""

    model_config = ConfigDict(frozen=True)

    id: str
    body: str = ""
    author_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Todo(BaseModel):
    """A todo item owned by one user and shared with invited users."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    user_id: str
    completed: bool = False
    invited_users: frozenset[str] = frozenset()

    def is_participant(self, subject_id: str) -> bool:
        return self.user_id == subject_id or subject_id in self.invited_users


@dataclass(frozen=True)
class ResourceSpec:
    """Binds a resource type to its closed action set and instance model."""

    actions: type[StrEnum]
    data_type: type[BaseModel]

    def action(self, value: StrEnum | str) -> StrEnum:
        return self.actions(value)


RESOURCES: Mapping[ResourceType, ResourceSpec] = MappingProxyType(
    {
        ResourceType.COMMENTS: ResourceSpec(CommentAction, Comment),
        ResourceType.TODOS: ResourceSpec(TodoAction, Todo),
    }
)
