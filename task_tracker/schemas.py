from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Priority, Task, TaskPatch, TaskStats


class TaskCreate(BaseModel):
    # Emptiness is checked by the store so the client gets a 400, not a 422
    title: Optional[str] = None
    priority: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    priority: Optional[str] = None
    # Missing or null both mean "not completed"; the flag is always written
    completed: Optional[bool] = None

    def to_patch(self) -> TaskPatch:
        return TaskPatch(
            title=self.title,
            priority=Priority.lookup(self.priority),
            completed=bool(self.completed),
        )


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    priority: Priority
    completed: bool
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            priority=task.priority,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    pending: int
    completion_rate: float = Field(alias="completionRate")


class PriorityCounts(BaseModel):
    high: int
    medium: int
    low: int


class StatsResponse(BaseModel):
    tasks: TaskCounts
    priority: PriorityCounts
    timestamp: int
    version: str

    @classmethod
    def from_stats(cls, stats: TaskStats, timestamp: int, version: str) -> "StatsResponse":
        return cls(
            tasks=TaskCounts(
                total=stats.total,
                completed=stats.completed,
                pending=stats.pending,
                completion_rate=stats.completion_rate,
            ),
            priority=PriorityCounts(high=stats.high, medium=stats.medium, low=stats.low),
            timestamp=timestamp,
            version=version,
        )


class ErrorResponse(BaseModel):
    error: str
    status: int
    timestamp: int
