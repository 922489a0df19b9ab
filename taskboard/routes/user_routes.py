from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskboard.auth.dependencies import get_current_identity
from taskboard.auth.identity import Identity
from taskboard.database import get_db
from taskboard.schemas.user import TeacherListResponse, UserResponse
from taskboard.services import user_service

router = APIRouter(tags=['users'])


@router.get('/teachers', response_model=TeacherListResponse)
def list_teachers(db: Session = Depends(get_db)):
    return TeacherListResponse(teachers=user_service.list_teachers(db))


@router.get('/me', response_model=UserResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return UserResponse(user=user_service.get_profile(db, identity))
