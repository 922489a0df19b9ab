from datetime import date, datetime

from pydantic import field_validator

from taskboard.core import config
from taskboard.models.task import Progress
from taskboard.schemas.base import CamelModel, Envelope, MessageEnvelope
from taskboard.schemas.user import UserSummary

PROGRESS_ERROR = 'Progress must be one of: ' + ', '.join(progress.value for progress in Progress)


def normalize_title(value: str, empty_message: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(empty_message)
    if len(normalized) > config.MAX_TITLE_LENGTH:
        raise ValueError(f'Title cannot exceed {config.MAX_TITLE_LENGTH} characters')
    return normalized


def normalize_description(value: str | None) -> str:
    if value is None:
        return ''
    normalized = value.strip()
    if len(normalized) > config.MAX_DESCRIPTION_LENGTH:
        raise ValueError(f'Description cannot exceed {config.MAX_DESCRIPTION_LENGTH} characters')
    return normalized


def parse_due_date(value: object) -> date | None:
    """Accept an ISO date or datetime and keep only the calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            pass
    raise ValueError('Due date must be a valid date')


def parse_progress(value: object) -> Progress:
    try:
        return Progress(value)
    except ValueError:
        raise ValueError(PROGRESS_ERROR) from None


class TaskCreateRequest(CamelModel):
    title: str
    description: str | None = None
    due_date: date | None = None
    progress: Progress = Progress.NOT_STARTED
    user_id: str | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        return normalize_title(value, 'Title is required')

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str:
        return normalize_description(value)

    @field_validator('due_date', mode='before')
    @classmethod
    def validate_due_date(cls, value: object) -> date | None:
        return parse_due_date(value)

    @field_validator('progress', mode='before')
    @classmethod
    def validate_progress(cls, value: object) -> Progress:
        if value is None:
            return Progress.NOT_STARTED
        return parse_progress(value)


class TaskUpdateRequest(CamelModel):
    """Partial update; only fields present in the request body are applied."""

    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    progress: Progress | None = None

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError('Title cannot be empty')
        return normalize_title(value, 'Title cannot be empty')

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str:
        return normalize_description(value)

    @field_validator('due_date', mode='before')
    @classmethod
    def validate_due_date(cls, value: object) -> date | None:
        return parse_due_date(value)

    @field_validator('progress', mode='before')
    @classmethod
    def validate_progress(cls, value: object) -> Progress:
        return parse_progress(value)

    def changes(self) -> dict:
        return {field: getattr(self, field) for field in self.model_fields_set}


class TaskOut(CamelModel):
    id: str
    user_id: str
    title: str
    description: str
    due_date: date | None = None
    progress: Progress
    created_at: datetime
    updated_at: datetime
    owner: UserSummary | None = None


class TaskResponse(MessageEnvelope):
    task: TaskOut


class TaskListResponse(Envelope):
    count: int
    tasks: list[TaskOut]
