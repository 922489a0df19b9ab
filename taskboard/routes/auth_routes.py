from fastapi import APIRouter, Depends, status

from taskboard.auth.dependencies import get_auth_service, get_throttled_auth_service
from taskboard.schemas.user import AuthResponse, LoginRequest, SignupRequest
from taskboard.services.auth_service import AuthService

router = APIRouter(tags=['auth'])


@router.post('/signup', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.signup(data)
    return AuthResponse(message='User created successfully.', token=result.token, user=result.user)


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, auth: AuthService = Depends(get_throttled_auth_service)):
    result = auth.login(data)
    return AuthResponse(message='Login successful.', token=result.token, user=result.user)
