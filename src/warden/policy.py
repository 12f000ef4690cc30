"""Reference policy for comments and todos.

Every role declares its capabilities explicitly; an admin does not inherit
anything from user.
"""

from __future__ import annotations

from warden.core.evaluator import Evaluator
from warden.core.registry import PolicyRegistry
from warden.models.resource import Comment, Todo
from warden.models.subject import Subject


def _not_blocked_by_author(user: Subject, comment: Comment) -> bool:
    return comment.author_id not in user.blocked_by


def _is_author(user: Subject, comment: Comment) -> bool:
    return comment.author_id == user.id


def _not_blocked_by_owner(user: Subject, todo: Todo) -> bool:
    return todo.user_id not in user.blocked_by


def _is_participant(user: Subject, todo: Todo) -> bool:
    return todo.is_participant(user.id)


def _participant_and_completed(user: Subject, todo: Todo) -> bool:
    return todo.is_participant(user.id) and todo.completed


def _completed(user: Subject, todo: Todo) -> bool:
    return todo.completed


ROLES = {
    "admin": {
        "comments": {"view": True, "create": True, "update": True},
        "todos": {"view": True, "create": True, "update": True, "delete": True},
    },
    "moderator": {
        "comments": {"view": True, "create": True, "update": True},
        # Only completed todos may be removed, whoever owns them.
        "todos": {"view": True, "create": True, "update": True, "delete": _completed},
    },
    "user": {
        "comments": {
            "view": _not_blocked_by_author,
            "create": True,
            "update": _is_author,
        },
        "todos": {
            "view": _not_blocked_by_owner,
            "create": True,
            "update": _is_participant,
            "delete": _participant_and_completed,
        },
    },
}

REGISTRY = PolicyRegistry(ROLES, exhaustive=True)
EVALUATOR = Evaluator(REGISTRY)
