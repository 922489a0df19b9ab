"""Signup, login and session-token verification."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.auth import jwt_handler
from taskboard.auth.identity import Identity
from taskboard.auth.passwords import hash_password, verify_password
from taskboard.auth.rate_limit import LoginThrottle
from taskboard.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    TokenFailure,
    Unauthorized,
    ValidationError,
)
from taskboard.models.user import Role, User
from taskboard.schemas.user import LoginRequest, SignupRequest, UserOut

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: UserOut


class AuthService:
    def __init__(self, db: Session, throttle: LoginThrottle | None = None):
        self.db = db
        self.throttle = throttle

    def _find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def _resolve_teacher(self, role: Role, teacher_id: str | None) -> User | None:
        if role is Role.TEACHER:
            if teacher_id:
                raise ValidationError('teacherId', 'Teachers cannot be assigned to a teacher.')
            return None

        if not teacher_id:
            raise ValidationError('teacherId', 'Students must have a valid teacherId.')

        teacher = self.db.get(User, teacher_id)
        if teacher is None:
            raise ValidationError('teacherId', 'Teacher not found. Please provide a valid teacherId.')
        if not teacher.is_teacher:
            raise ValidationError('teacherId', 'The provided teacherId does not belong to a teacher.')
        return teacher

    def _issue(self, user: User) -> AuthResult:
        token = jwt_handler.create_access_token(user_id=user.id, role=user.role)
        return AuthResult(token=token, user=UserOut.model_validate(user))

    def signup(self, data: SignupRequest) -> AuthResult:
        teacher = self._resolve_teacher(data.role, data.teacher_id)

        if self._find_by_email(data.email) is not None:
            raise DuplicateEmail()

        user = User(
            email=data.email,
            hashed_password=hash_password(data.password),
            role=data.role.value,
            teacher_id=teacher.id if teacher else None,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmail() from exc
        self.db.refresh(user)

        logger.info('Created %s account %s', user.role, user.id)
        return self._issue(user)

    def check_login_throttle(self, client_id: str) -> None:
        if self.throttle is not None:
            self.throttle.hit(client_id)

    def login(self, data: LoginRequest, client_id: str | None = None) -> AuthResult:
        """Authenticate ``data``. Pass ``client_id`` unless the throttle was already checked."""
        if client_id is not None:
            self.check_login_throttle(client_id)

        user = self._find_by_email(data.email)
        if user is None or not verify_password(data.password, user.hashed_password):
            logger.info('Failed login for %s', data.email)
            raise InvalidCredentials()

        return self._issue(user)

    def verify_token(self, token: str | None) -> Identity:
        try:
            payload = jwt_handler.decode_access_token(token)
        except Unauthorized as exc:
            logger.info('Rejected session token: %s', exc.reason.value)
            raise

        if payload.get('role') not in {role.value for role in Role}:
            logger.info('Rejected session token: %s', TokenFailure.MALFORMED.value)
            raise Unauthorized(TokenFailure.MALFORMED)

        user = self.db.get(User, payload['sub'])
        if user is None:
            logger.info('Rejected session token: %s', TokenFailure.UNKNOWN_USER.value)
            raise Unauthorized(TokenFailure.UNKNOWN_USER)

        return Identity.from_user(user)
