from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def display_name(self) -> str:
        return f"{self.value.title()} Priority"

    @classmethod
    def lookup(cls, value: Optional[str]) -> Optional["Priority"]:
        """Case-insensitive match, None when the value is absent or unknown"""
        if value is None:
            return None
        return cls.__members__.get(value.strip().upper())

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Priority":
        """Parse client input; anything unrecognized falls back to MEDIUM"""
        return cls.lookup(value) or cls.MEDIUM


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    priority: Priority
    completed: bool
    created_at: datetime
    updated_at: datetime

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', priority='{self.priority.value}')>"


@dataclass(frozen=True)
class TaskPatch:
    """Partial update input.

    Empty title and missing priority leave the stored values alone, while
    ``completed`` is always written.
    """

    title: Optional[str] = None
    priority: Optional[Priority] = None
    completed: bool = False


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int
    high: int
    medium: int
    low: int

    @property
    def completion_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100, 2)
