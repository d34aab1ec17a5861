"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

from tests.utils.helpers import FROZEN_NOW, iso_from_now

# Set test environment variables before application modules are imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("TASKS_SEED_SAMPLE_DATA", "false")


@pytest.fixture
def frozen_time():
    """Freeze the clock at FROZEN_NOW."""
    with freeze_time(FROZEN_NOW) as frozen:
        yield frozen


@pytest.fixture
def task_store():
    """Empty task store."""
    from src.services.task_store import TaskStore
    return TaskStore()


@pytest.fixture
def app_context(task_store):
    """Application context wrapping an empty store."""
    from src.services.app_context import AppContext
    return AppContext(store=task_store)


@pytest.fixture
def valid_create_payload():
    """Raw create payload as a client would send it."""
    return {
        "title": "  Write release notes  ",
        "description": "  Summarize the changes for 1.2  ",
        "priority": "high",
        "dueDate": iso_from_now(hours=12),
    }


@pytest.fixture
def created_task(task_store, frozen_time, valid_create_payload):
    """A task created through the validator at FROZEN_NOW."""
    from src.services.validation import validate_create_task
    return task_store.create_task(validate_create_task(valid_create_payload))
