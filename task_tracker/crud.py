from typing import List, Optional

from .models import Priority, Task
from .store import TaskStore

STATUS_FILTERS = {"completed": True, "pending": False}


def get_tasks(
    store: TaskStore,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Task]:
    """Get tasks with the optional filter that applies.

    A non-empty search wins over status, which wins over priority. An
    unrecognized status is ignored.
    """
    if search is not None and search.strip():
        return store.search(search)

    if status in STATUS_FILTERS:
        return store.list_by_status(STATUS_FILTERS[status])

    if priority is not None:
        return store.list_by_priority(Priority.from_string(priority))

    return store.list_tasks()
