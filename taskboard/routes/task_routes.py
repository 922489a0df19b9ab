from fastapi import APIRouter, Depends, Query, status

from taskboard.auth.dependencies import get_current_identity, get_task_service
from taskboard.auth.identity import Identity
from taskboard.schemas.base import MessageEnvelope
from taskboard.schemas.task import TaskCreateRequest, TaskListResponse, TaskResponse, TaskUpdateRequest
from taskboard.services.task_service import TaskService

router = APIRouter(tags=['tasks'])


@router.get('', response_model=TaskListResponse)
def list_tasks(
    progress: str | None = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    tasks: TaskService = Depends(get_task_service),
):
    visible = tasks.list_tasks(identity, progress=progress)
    return TaskListResponse(count=len(visible), tasks=visible)


@router.post('', response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    data: TaskCreateRequest,
    identity: Identity = Depends(get_current_identity),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.create_task(identity, data)
    return TaskResponse(message='Task created successfully.', task=task)


@router.put('/{task_id}', response_model=TaskResponse)
def update_task(
    task_id: str,
    data: TaskUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.update_task(identity, task_id, data)
    return TaskResponse(message='Task updated successfully.', task=task)


@router.delete('/{task_id}', response_model=MessageEnvelope)
def delete_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    tasks: TaskService = Depends(get_task_service),
):
    tasks.delete_task(identity, task_id)
    return MessageEnvelope(message='Task deleted successfully.')
