"""In-memory task store."""

from datetime import datetime, timedelta
from itertools import count
from typing import Optional

from ulid import ULID

from src.models.task import CreateTaskRequest, Task, TaskPriority, TaskStatus, UpdateTaskRequest
from src.utils.dates import parse_iso_datetime, to_iso, utc_now
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

URGENCY_WINDOW = timedelta(hours=24)


def generate_task_id() -> str:
    """Generate a text-based task ID (ULID format)."""
    return str(ULID())


def is_task_urgent(due_date: str, now: Optional[datetime] = None) -> bool:
    """True when ``due_date`` is between now and now + 24h, both ends included."""
    if now is None:
        now = utc_now()
    remaining = parse_iso_datetime(due_date) - now
    return timedelta(0) <= remaining <= URGENCY_WINDOW


class TaskStore:
    """
    Keyed collection of tasks owned by one application context.

    Operations run synchronously to completion; there is no locking.
    Returned ``Task`` objects are immutable, so callers cannot alter the
    stored state.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}
        # insertion sequence, used to order tasks created within the same millisecond
        self._sequence: dict[str, int] = {}
        self._counter = count()

    def __len__(self) -> int:
        return len(self._tasks)

    def get_all_tasks(self) -> list[Task]:
        """All tasks, most recently created first."""
        return sorted(
            self._tasks.values(),
            key=lambda task: (task.created_at, self._sequence[task.id]),
            reverse=True,
        )

    def get_task_by_id(self, task_id: str) -> Optional[Task]:
        """Return the task, or None when the id is unknown."""
        return self._tasks.get(task_id)

    def create_task(self, data: CreateTaskRequest) -> Task:
        now = utc_now()
        timestamp = to_iso(now)
        task = Task(
            id=generate_task_id(),
            title=data.title,
            description=data.description,
            status=TaskStatus.TODO,
            priority=data.priority,
            due_date=data.due_date,
            created_at=timestamp,
            updated_at=timestamp,
            is_urgent=is_task_urgent(data.due_date, now),
        )

        self._tasks[task.id] = task
        self._sequence[task.id] = next(self._counter)
        logger.info("Task created", task_id=task.id, priority=task.priority.value, is_urgent=task.is_urgent)
        return task

    def update_task(self, task_id: str, data: UpdateTaskRequest) -> Optional[Task]:
        """
        Merge the supplied fields over an existing task.

        Returns None when the id is unknown. ``updated_at`` is always
        refreshed; ``is_urgent`` is only recomputed when the update carries a
        new due date, so an unrelated edit keeps the previous flag.
        """
        existing = self._tasks.get(task_id)
        if existing is None:
            return None

        now = utc_now()
        changes = data.changes()
        changed_fields = sorted(changes)
        changes["updated_at"] = to_iso(now)
        if "due_date" in changes:
            changes["is_urgent"] = is_task_urgent(changes["due_date"], now)

        updated = existing.model_copy(update=changes)
        self._tasks[task_id] = updated
        logger.info("Task updated", task_id=task_id, fields=changed_fields)
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Remove the task; False when there was nothing to remove."""
        if task_id not in self._tasks:
            return False
        del self._tasks[task_id]
        del self._sequence[task_id]
        logger.info("Task deleted", task_id=task_id)
        return True

    def initialize_sample_data(self) -> None:
        """Seed three sample tasks when the store is empty."""
        if self._tasks:
            return

        now = utc_now()
        samples = [
            CreateTaskRequest(
                title="Complete project documentation",
                description="Write comprehensive documentation for the new feature",
                priority=TaskPriority.HIGH,
                due_date=to_iso(now + timedelta(hours=12)),
            ),
            CreateTaskRequest(
                title="Review pull requests",
                description="Review and approve pending pull requests",
                priority=TaskPriority.MEDIUM,
                due_date=to_iso(now + timedelta(hours=48)),
            ),
            CreateTaskRequest(
                title="Update dependencies",
                priority=TaskPriority.LOW,
                due_date=to_iso(now + timedelta(days=7)),
            ),
        ]
        for sample in samples:
            self.create_task(sample)
        logger.info("Sample tasks loaded", count=len(samples))
