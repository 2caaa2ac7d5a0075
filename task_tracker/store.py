import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from .exceptions import InvalidTaskError, TaskNotFoundError
from .models import Priority, Task, TaskPatch, TaskStats

logger = logging.getLogger(__name__)

SAMPLE_TASKS = [
    ("Welcome to VelocityTasks! 🚀", Priority.HIGH),
    ("Create your first real task", Priority.MEDIUM),
    ("Explore the features", Priority.LOW),
]


def _newest_first(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=lambda task: task.created_at, reverse=True)


class TaskStore:
    """
    In-memory task store.

    Tasks are immutable values. Writers swap whole values in the dict under
    ``_lock``; readers copy the values under the lock and do the filtering
    and sorting outside it.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._tasks: Dict[str, Task] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return self.count()

    def _snapshot(self) -> List[Task]:
        with self._lock:
            return list(self._tasks.values())

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def create_task(self, title: Optional[str], priority: Optional[Priority] = None) -> Task:
        """Create a new task"""
        if title is None or not title.strip():
            raise InvalidTaskError("Task title is required")

        now = self._clock()
        task = Task(
            id=str(uuid.uuid4()),
            title=title.strip(),
            priority=priority or Priority.MEDIUM,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._tasks[task.id] = task
        logger.info("Created task id=%s priority=%s", task.id, task.priority.value)
        return task

    def get_task(self, task_id: str) -> Task:
        """Get a task by ID"""
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(self, task_id: str, patch: TaskPatch) -> Task:
        """Apply a partial update and return the new value"""
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                raise TaskNotFoundError(task_id)

            title = current.title
            if patch.title is not None and patch.title.strip():
                title = patch.title.strip()

            updated = replace(
                current,
                title=title,
                priority=patch.priority or current.priority,
                completed=patch.completed,
                updated_at=max(self._clock(), current.updated_at),
            )
            self._tasks[task_id] = updated
        logger.info("Updated task id=%s completed=%s", task_id, updated.completed)
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Delete a task, returning whether anything was removed"""
        with self._lock:
            removed = self._tasks.pop(task_id, None)
        if removed is None:
            logger.debug("Delete of unknown task id=%s ignored", task_id)
            return False
        logger.info("Deleted task id=%s", task_id)
        return True

    def list_tasks(self) -> List[Task]:
        """All tasks, newest first"""
        return _newest_first(self._snapshot())

    def list_by_status(self, completed: bool) -> List[Task]:
        return _newest_first(t for t in self._snapshot() if t.completed == completed)

    def list_by_priority(self, priority: Priority) -> List[Task]:
        return _newest_first(t for t in self._snapshot() if t.priority == priority)

    def search(self, query: Optional[str]) -> List[Task]:
        """Case-insensitive title search; an empty query lists everything"""
        if query is None or not query.strip():
            return self.list_tasks()

        needle = query.casefold()
        return _newest_first(t for t in self._snapshot() if needle in t.title.casefold())

    def stats(self) -> TaskStats:
        counts = {priority: 0 for priority in Priority}
        completed = 0
        tasks = self._snapshot()
        for task in tasks:
            counts[task.priority] += 1
            if task.completed:
                completed += 1

        return TaskStats(
            total=len(tasks),
            completed=completed,
            pending=len(tasks) - completed,
            high=counts[Priority.HIGH],
            medium=counts[Priority.MEDIUM],
            low=counts[Priority.LOW],
        )

    def seed_sample_tasks(self) -> List[Task]:
        """Insert the demonstration tasks shown on a fresh install"""
        seeded = [self.create_task(title, priority) for title, priority in SAMPLE_TASKS]
        logger.info("Seeded %d sample tasks", len(seeded))
        return seeded
