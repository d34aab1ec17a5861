"""Task endpoint logic: parse request, validate, call the store, build a response.

Responses use the serverless shape ``{"statusCode", "headers", "body"}``
with a JSON body of ``{"data": ...}``, ``{"message": ...}`` or
``{"error": ...}``. Validation failures become 400, unknown ids 404, and
anything unexpected (malformed JSON included) a generic 500.
"""

import json
from typing import Any, Optional, Union

from src.services.task_store import TaskStore
from src.services.validation import validate_create_task, validate_update_task
from src.utils.errors import ValidationError
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
NOT_FOUND_MESSAGE = "Task not found"


def json_response(status_code: int, payload: dict, headers: Optional[dict] = None) -> dict:
    """Build a serverless-style JSON response."""
    response_headers = {"Content-Type": "application/json"}
    if headers:
        response_headers.update(headers)
    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(payload),
    }


def internal_error() -> dict:
    """Generic 500; details go to the log only."""
    return json_response(500, {"error": INTERNAL_ERROR_MESSAGE})


def _not_found() -> dict:
    return json_response(404, {"error": NOT_FOUND_MESSAGE})


def _parse_body(raw_body: Union[bytes, str]) -> Any:
    # Non UTF-8 bytes raise UnicodeDecodeError, an empty or malformed body json.JSONDecodeError
    if isinstance(raw_body, bytes):
        raw_body = raw_body.decode("utf-8")
    return json.loads(raw_body)


def list_tasks(store: TaskStore) -> dict:
    """GET /api/tasks"""
    try:
        with log_timing("list_tasks", logger=logger):
            tasks = store.get_all_tasks()
        return json_response(200, {"data": [task.to_dict() for task in tasks]})
    except Exception:
        logger.exception("Error fetching tasks")
        return internal_error()


def get_task(store: TaskStore, task_id: str) -> dict:
    """GET /api/tasks/{id}"""
    try:
        task = store.get_task_by_id(task_id)
        if task is None:
            return _not_found()
        return json_response(200, {"data": task.to_dict()})
    except Exception:
        logger.exception("Error fetching task", task_id=task_id)
        return internal_error()


def create_task(store: TaskStore, raw_body: Union[bytes, str]) -> dict:
    """POST /api/tasks"""
    try:
        with log_timing("create_task", logger=logger):
            request = validate_create_task(_parse_body(raw_body))
            task = store.create_task(request)
        return json_response(201, {"data": task.to_dict()})
    except ValidationError as e:
        logger.warning("Task creation rejected", violations=e.errors)
        return json_response(400, {"error": e.message})
    except Exception:
        logger.exception("Error creating task")
        return internal_error()


def update_task(store: TaskStore, task_id: str, raw_body: Union[bytes, str]) -> dict:
    """PUT /api/tasks/{id}"""
    try:
        with log_timing("update_task", logger=logger, task_id=task_id):
            request = validate_update_task(_parse_body(raw_body))
            task = store.update_task(task_id, request)
        if task is None:
            return _not_found()
        return json_response(200, {"data": task.to_dict()})
    except ValidationError as e:
        logger.warning("Task update rejected", task_id=task_id, violations=e.errors)
        return json_response(400, {"error": e.message})
    except Exception:
        logger.exception("Error updating task", task_id=task_id)
        return internal_error()


def delete_task(store: TaskStore, task_id: str) -> dict:
    """DELETE /api/tasks/{id}"""
    try:
        if not store.delete_task(task_id):
            return _not_found()
        return json_response(200, {"message": "Task deleted successfully"})
    except Exception:
        logger.exception("Error deleting task", task_id=task_id)
        return internal_error()
