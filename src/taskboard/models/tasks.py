"""Task models (the subset of task state the board engine owns)."""

from datetime import datetime

from pydantic import BaseModel, Field


class Task(BaseModel):
    """A work item on the board."""

    id: str
    title: str = Field(..., description="Task title")
    project_id: str | None = Field(default=None, description="Owning project (optional)")
    status: str = Field(default="todo", description="Id of the column the task sits in")
    position: int = Field(default=0, description="Dense order within its status bucket")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskCreate(BaseModel):
    """Input for creating a task."""

    title: str = Field(..., max_length=200)
    status: str = Field(default="todo")
    project_id: str | None = None
