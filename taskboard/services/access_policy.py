"""Task visibility and mutation rules.

Everything here is a pure function of the caller's identity and the target. The
teacher-to-students relationship is looked up by the caller and passed in, so these
rules never touch the database.
"""

from collections.abc import Callable, Iterable
from typing import Protocol

from taskboard.auth.identity import Identity
from taskboard.core.errors import Forbidden, NotFound
from taskboard.models.task import Progress
from taskboard.models.user import Role


class OwnedTask(Protocol):
    user_id: str


ScopeRule = Callable[[Identity, Iterable[str]], frozenset[str]]


def _student_scope(identity: Identity, assigned_student_ids: Iterable[str]) -> frozenset[str]:
    return frozenset({identity.id})


def _teacher_scope(identity: Identity, assigned_student_ids: Iterable[str]) -> frozenset[str]:
    return frozenset({identity.id, *assigned_student_ids})


SCOPE_RULES: dict[Role, ScopeRule] = {
    Role.STUDENT: _student_scope,
    Role.TEACHER: _teacher_scope,
}


def readable_owner_ids(identity: Identity, assigned_student_ids: Iterable[str] = ()) -> frozenset[str]:
    """Owner ids whose tasks ``identity`` may list."""
    return SCOPE_RULES[identity.role](identity, assigned_student_ids)


def parse_progress_filter(value: str | None) -> Progress | None:
    # Unknown values leave the scope unfiltered rather than failing the request.
    if not value:
        return None
    try:
        return Progress(value)
    except ValueError:
        return None


def resolve_task_owner(identity: Identity, requested_user_id: str | None) -> str:
    if requested_user_id and requested_user_id != identity.id:
        raise Forbidden('Forbidden: You can only create tasks for yourself.')
    return identity.id


def authorize_task_write(identity: Identity, task: OwnedTask | None) -> OwnedTask:
    """Only the owner may update or delete a task, whatever their role."""
    if task is None:
        raise NotFound('Task not found.')
    if task.user_id != identity.id:
        raise Forbidden('Forbidden: You can only modify tasks that you created.')
    return task
