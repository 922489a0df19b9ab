from datetime import date

import pytest
from pydantic import ValidationError

from taskboard.models.task import Progress
from taskboard.models.user import Role
from taskboard.schemas.task import TaskCreateRequest, TaskOut, TaskUpdateRequest
from taskboard.schemas.user import LoginRequest, SignupRequest


def test_signup_request_normalizes_email_and_role() -> None:
    request = SignupRequest.model_validate(
        {'email': ' Alice@X.COM ', 'password': 'secret1', 'role': ' Student ', 'teacherId': ' t-1 '}
    )

    assert request.email == 'alice@x.com'
    assert request.role is Role.STUDENT
    assert request.teacher_id == 't-1'


@pytest.mark.parametrize(
    ('payload', 'message'),
    [
        ({'email': 'not-an-email', 'password': 'secret1', 'role': 'teacher'}, 'Please provide a valid email address'),
        ({'email': 'a' * 315 + '@x.com', 'password': 'secret1', 'role': 'teacher'}, 'Email must be at most 320 characters long'),
        ({'email': 'bob@x.com', 'password': '12345', 'role': 'teacher'}, 'Password must be at least 6 characters long'),
        ({'email': 'bob@x.com', 'password': 'secret1', 'role': 'admin'}, 'Role must be either "student" or "teacher"'),
    ],
)
def test_signup_request_rejects_invalid_fields(payload: dict, message: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        SignupRequest.model_validate(payload)

    assert message in str(exception_info.value)


def test_login_request_requires_password() -> None:
    with pytest.raises(ValidationError):
        LoginRequest(email='bob@x.com', password='')


def test_task_create_request_trims_and_defaults() -> None:
    request = TaskCreateRequest(title='  HW1 ', description='  read  ')

    assert request.title == 'HW1'
    assert request.description == 'read'
    assert request.progress is Progress.NOT_STARTED
    assert request.due_date is None
    assert request.user_id is None


def test_task_create_request_accepts_camel_case_keys() -> None:
    request = TaskCreateRequest.model_validate({'title': 'HW1', 'dueDate': '2030-05-01', 'userId': 'u-1'})

    assert request.due_date == date(2030, 5, 1)
    assert request.user_id == 'u-1'


@pytest.mark.parametrize('value', ['2030-05-01', '2030-05-01T10:30:00Z', '2030-05-01T10:30:00+02:00'])
def test_task_create_request_keeps_date_part_of_iso_values(value: str) -> None:
    assert TaskCreateRequest(title='HW1', due_date=value).due_date == date(2030, 5, 1)


@pytest.mark.parametrize(
    ('payload', 'message'),
    [
        ({'title': '   '}, 'Title is required'),
        ({'title': 'x' * 201}, 'Title cannot exceed 200 characters'),
        ({'title': 'HW1', 'description': 'x' * 1001}, 'Description cannot exceed 1000 characters'),
        ({'title': 'HW1', 'dueDate': 'next tuesday'}, 'Due date must be a valid date'),
        ({'title': 'HW1', 'progress': 'done'}, 'Progress must be one of: not-started, in-progress, completed'),
    ],
)
def test_task_create_request_rejects_invalid_fields(payload: dict, message: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        TaskCreateRequest.model_validate(payload)

    assert message in str(exception_info.value)


def test_task_create_request_accepts_boundary_lengths() -> None:
    request = TaskCreateRequest(title='x' * 200, description='y' * 1000)

    assert len(request.title) == 200
    assert len(request.description) == 1000


def test_task_update_request_reports_only_supplied_fields() -> None:
    request = TaskUpdateRequest.model_validate({'progress': 'in-progress', 'dueDate': None})

    assert request.changes() == {'progress': Progress.IN_PROGRESS, 'due_date': None}


def test_task_update_request_ignores_owner_changes() -> None:
    request = TaskUpdateRequest.model_validate({'title': 'HW2', 'userId': 'someone-else'})

    assert request.changes() == {'title': 'HW2'}


@pytest.mark.parametrize(
    ('payload', 'message'),
    [
        ({'title': None}, 'Title cannot be empty'),
        ({'title': '  '}, 'Title cannot be empty'),
        ({'progress': None}, 'Progress must be one of'),
    ],
)
def test_task_update_request_rejects_invalid_values(payload: dict, message: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        TaskUpdateRequest.model_validate(payload)

    assert message in str(exception_info.value)


def test_task_out_serializes_camel_case() -> None:
    task = TaskOut(
        id='t-1',
        user_id='u-1',
        title='HW1',
        description='',
        due_date=date(2030, 5, 1),
        progress='not-started',
        created_at='2030-01-01T00:00:00',
        updated_at='2030-01-01T00:00:00',
    )

    dumped = task.model_dump(mode='json', by_alias=True)

    assert dumped['userId'] == 'u-1'
    assert dumped['dueDate'] == '2030-05-01'
    assert dumped['progress'] == 'not-started'
    assert 'user_id' not in dumped
