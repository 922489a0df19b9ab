from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskboard.auth.identity import Identity
from taskboard.auth.rate_limit import LoginThrottle, get_client_identifier
from taskboard.database import get_db
from taskboard.services.auth_service import AuthService
from taskboard.services.task_service import TaskService

# Missing or non-bearer headers are reported through our own 401 envelope.
security = HTTPBearer(auto_error=False)


def get_login_throttle(request: Request) -> LoginThrottle:
    return request.app.state.login_throttle


def get_auth_service(
    db: Session = Depends(get_db),
    throttle: LoginThrottle = Depends(get_login_throttle),
) -> AuthService:
    return AuthService(db, throttle=throttle)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    token = credentials.credentials if credentials else None
    return auth.verify_token(token)


def get_throttled_auth_service(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> AuthService:
    # Dependencies resolve before the request body is validated.
    auth.check_login_throttle(get_client_identifier(request))
    return auth
