"""Request payload validation for task creation and updates.

Both validators collect every violated constraint before failing, so the
client sees all problems in a single ``ValidationError``.
"""

from typing import Any

from src.models.task import CreateTaskRequest, TaskPriority, TaskStatus, UpdateTaskRequest
from src.utils.dates import parse_iso_datetime
from src.utils.errors import ValidationError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

_PRIORITIES = tuple(p.value for p in TaskPriority)
_STATUSES = tuple(s.value for s in TaskStatus)

PRIORITY_MESSAGE = "Priority must be one of: low, medium, high"
STATUS_MESSAGE = "Status must be one of: todo, in-progress, done"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_valid_date(value: str) -> bool:
    try:
        parse_iso_datetime(value)
    except ValueError:
        return False
    return True


def _check_description(value: Any, errors: list[str]) -> None:
    if not isinstance(value, str):
        errors.append("Description must be a string")
    elif len(value.strip()) > DESCRIPTION_MAX_LENGTH:
        errors.append("Description must be less than 500 characters")


def _require_object(data: Any) -> None:
    if not isinstance(data, dict):
        raise ValidationError(["Request body must be a JSON object"])


def validate_create_task(data: Any) -> CreateTaskRequest:
    """
    Validate a create payload and return it normalized.

    Title and description are trimmed; ``dueDate`` is kept exactly as sent.
    A ``null`` description counts as not supplied.
    """
    _require_object(data)
    errors: list[str] = []

    title = data.get("title")
    if _is_blank(title):
        errors.append("Title is required and must be a non-empty string")
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors.append("Title must be less than 100 characters")

    description = data.get("description")
    if description is not None:
        _check_description(description, errors)

    if data.get("priority") not in _PRIORITIES:
        errors.append(PRIORITY_MESSAGE)

    due_date = data.get("dueDate")
    if not due_date or not isinstance(due_date, str):
        errors.append("Due date is required")
    elif not _is_valid_date(due_date):
        errors.append("Due date must be a valid date")

    if errors:
        raise ValidationError(errors)

    return CreateTaskRequest(
        title=title.strip(),
        description=description.strip() if description is not None else None,
        priority=TaskPriority(data["priority"]),
        due_date=due_date,
    )


def validate_update_task(data: Any) -> UpdateTaskRequest:
    """
    Validate a partial update payload.

    Only keys present in ``data`` are checked and returned; an empty payload
    yields an empty (no-op) update. ``description: null`` clears the field,
    ``null`` for any other field is a violation.
    """
    _require_object(data)
    errors: list[str] = []
    fields: dict[str, Any] = {}

    if "title" in data:
        title = data["title"]
        if _is_blank(title):
            errors.append("Title must be a non-empty string")
        elif len(title.strip()) > TITLE_MAX_LENGTH:
            errors.append("Title must be less than 100 characters")
        else:
            fields["title"] = title.strip()

    if "description" in data:
        description = data["description"]
        if description is None:
            fields["description"] = None
        else:
            _check_description(description, errors)
            if isinstance(description, str):
                fields["description"] = description.strip()

    if "status" in data:
        if data["status"] not in _STATUSES:
            errors.append(STATUS_MESSAGE)
        else:
            fields["status"] = TaskStatus(data["status"])

    if "priority" in data:
        if data["priority"] not in _PRIORITIES:
            errors.append(PRIORITY_MESSAGE)
        else:
            fields["priority"] = TaskPriority(data["priority"])

    if "dueDate" in data:
        due_date = data["dueDate"]
        if not isinstance(due_date, str):
            errors.append("Due date must be a string")
        elif not _is_valid_date(due_date):
            errors.append("Due date must be a valid date")
        else:
            fields["due_date"] = due_date

    if errors:
        raise ValidationError(errors)

    return UpdateTaskRequest(**fields)
