"""Warden attribute models."""

from warden.models.resource import (
    RESOURCES,
    Comment,
    CommentAction,
    ResourceSpec,
    ResourceType,
    Todo,
    TodoAction,
)
from warden.models.subject import Role, Subject

__all__ = [
    "RESOURCES",
    "Comment",
    "CommentAction",
    "ResourceSpec",
    "ResourceType",
    "Role",
    "Subject",
    "Todo",
    "TodoAction",
]
