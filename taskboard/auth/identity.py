from dataclasses import dataclass

from taskboard.models.user import Role, User


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved from a verified session token."""

    id: str
    email: str
    role: Role
    teacher_id: str | None = None

    @classmethod
    def from_user(cls, user: User) -> 'Identity':
        return cls(
            id=user.id,
            email=user.email,
            role=Role(user.role),
            teacher_id=user.teacher_id,
        )
