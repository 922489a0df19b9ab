import re
from datetime import datetime

from pydantic import field_validator

from taskboard.core import config
from taskboard.models.user import Role
from taskboard.schemas.base import CamelModel, Envelope, MessageEnvelope

EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    if len(normalized) > config.MAX_EMAIL_LENGTH:
        raise ValueError(f'Email must be at most {config.MAX_EMAIL_LENGTH} characters long')
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError('Please provide a valid email address')
    return normalized


class SignupRequest(CamelModel):
    email: str
    password: str
    role: Role
    teacher_id: str | None = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < config.MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {config.MIN_PASSWORD_LENGTH} characters long')
        return value

    @field_validator('role', mode='before')
    @classmethod
    def validate_role(cls, value: object) -> str:
        normalized = value.strip().lower() if isinstance(value, str) else value
        if normalized not in {role.value for role in Role}:
            raise ValueError('Role must be either "student" or "teacher"')
        return normalized

    @field_validator('teacher_id')
    @classmethod
    def validate_teacher_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required')
        return value


class UserSummary(CamelModel):
    id: str
    email: str
    role: Role


class TeacherOption(CamelModel):
    id: str
    email: str


class UserOut(CamelModel):
    id: str
    email: str
    role: Role
    teacher_id: str | None = None
    teacher: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


class AuthResponse(MessageEnvelope):
    token: str
    user: UserOut


class UserResponse(Envelope):
    user: UserOut


class TeacherListResponse(Envelope):
    teachers: list[TeacherOption]
