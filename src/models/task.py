"""Task models."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Task workflow status. Any status may follow any other."""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """A stored task. Instances are immutable; updates produce copies."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Task ID (ULID)")
    title: str = Field(..., max_length=100, description="Task title")
    description: Optional[str] = Field(None, max_length=500, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Status: todo, in-progress, done")
    priority: TaskPriority = Field(..., description="Priority: low, medium, high")
    due_date: str = Field(..., alias="dueDate", description="Due date as supplied (ISO-8601)")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
    is_urgent: bool = Field(default=False, alias="isUrgent", description="Due within the next 24 hours")

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (camelCase keys, description omitted when unset)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CreateTaskRequest(BaseModel):
    """Validated payload for creating a task."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    priority: TaskPriority
    due_date: str = Field(..., alias="dueDate")


class UpdateTaskRequest(BaseModel):
    """
    Validated partial update.

    Only fields that were explicitly supplied are part of the update;
    ``description=None`` supplied explicitly clears the description.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = Field(None, alias="dueDate")

    def changes(self) -> dict[str, Any]:
        """Supplied fields keyed by attribute name."""
        return self.model_dump(exclude_unset=True)
