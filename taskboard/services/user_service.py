from sqlalchemy.orm import Session

from taskboard.auth.identity import Identity
from taskboard.core.errors import TokenFailure, Unauthorized
from taskboard.models.user import Role, User
from taskboard.schemas.user import TeacherOption, UserOut


def get_profile(db: Session, identity: Identity) -> UserOut:
    user = db.get(User, identity.id)
    if user is None:
        raise Unauthorized(TokenFailure.UNKNOWN_USER)
    return UserOut.model_validate(user)


def list_teachers(db: Session) -> list[TeacherOption]:
    teachers = db.query(User).filter(User.role == Role.TEACHER.value).order_by(User.email.asc()).all()
    return [TeacherOption.model_validate(teacher) for teacher in teachers]
