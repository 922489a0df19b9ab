import logging

from sqlalchemy.orm import Session

from taskboard.auth.identity import Identity
from taskboard.core.errors import Forbidden
from taskboard.models.task import Progress, Task
from taskboard.models.user import Role, User
from taskboard.schemas.task import TaskCreateRequest, TaskOut, TaskUpdateRequest
from taskboard.services import access_policy

logger = logging.getLogger(__name__)


class TaskService:
    """Task CRUD on behalf of an authenticated identity."""

    def __init__(self, db: Session):
        self.db = db

    def _assigned_student_ids(self, identity: Identity) -> list[str]:
        if identity.role is not Role.TEACHER:
            return []
        rows = self.db.query(User.id).filter(
            User.teacher_id == identity.id,
            User.role == Role.STUDENT.value,
        ).all()
        return [row.id for row in rows]

    def _get_writable_task(self, identity: Identity, task_id: str) -> Task:
        task = self.db.get(Task, task_id)
        try:
            return access_policy.authorize_task_write(identity, task)
        except Forbidden:
            logger.warning('User %s attempted to modify task %s owned by %s', identity.id, task_id, task.user_id)
            raise

    def list_tasks(self, identity: Identity, progress: str | None = None) -> list[TaskOut]:
        owner_ids = access_policy.readable_owner_ids(identity, self._assigned_student_ids(identity))
        query = self.db.query(Task).filter(Task.user_id.in_(sorted(owner_ids)))

        progress_filter = access_policy.parse_progress_filter(progress)
        if progress_filter is not None:
            query = query.filter(Task.progress == progress_filter.value)

        tasks = query.order_by(Task.created_at.desc(), Task.id.desc()).all()
        return [TaskOut.model_validate(task) for task in tasks]

    def create_task(self, identity: Identity, data: TaskCreateRequest) -> TaskOut:
        owner_id = access_policy.resolve_task_owner(identity, data.user_id)

        task = Task(
            user_id=owner_id,
            title=data.title,
            description=data.description or '',
            due_date=data.due_date,
            progress=data.progress.value,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)

        return TaskOut.model_validate(task)

    def update_task(self, identity: Identity, task_id: str, data: TaskUpdateRequest) -> TaskOut:
        task = self._get_writable_task(identity, task_id)

        changes = data.changes()
        if 'progress' in changes:
            changes['progress'] = Progress(changes['progress']).value
        for field, value in changes.items():
            setattr(task, field, value)

        if changes:
            self.db.commit()
            self.db.refresh(task)

        return TaskOut.model_validate(task)

    def delete_task(self, identity: Identity, task_id: str) -> None:
        task = self._get_writable_task(identity, task_id)
        self.db.delete(task)
        self.db.commit()
