"""Task dependency models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class DependencyType(StrEnum):
    """Temporal relation between a predecessor and a successor task."""

    FINISH_TO_START = "finish_to_start"  # successor starts after predecessor finishes
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"


class Dependency(BaseModel):
    """A directed edge predecessor -> successor in the task graph."""

    id: str
    predecessor_id: str
    successor_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = Field(default=0, description="Delay between the two ends, in days")
    created_at: datetime | None = None
