from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from .. import crud
from ..dependencies import get_store
from ..exceptions import TaskNotFoundError
from ..models import Priority
from ..schemas import TaskCreate, TaskResponse, TaskUpdate
from ..store import TaskStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
@router.get("/", response_model=List[TaskResponse], include_in_schema=False)
async def get_tasks(
    status: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    store: TaskStore = Depends(get_store),
):
    """Get all tasks, optionally filtered by search, status or priority"""
    tasks = crud.get_tasks(store, status=status, priority=priority, search=search)
    return [TaskResponse.from_task(task) for task in tasks]


@router.post("", response_model=TaskResponse, status_code=201)
@router.post("/", response_model=TaskResponse, status_code=201, include_in_schema=False)
async def create_task(task: TaskCreate, store: TaskStore = Depends(get_store)):
    """Create a new task"""
    created = store.create_task(task.title, Priority.from_string(task.priority))
    return TaskResponse.from_task(created)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Get a specific task by ID"""
    return TaskResponse.from_task(store.get_task(task_id))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    store: TaskStore = Depends(get_store),
):
    """Update a specific task"""
    return TaskResponse.from_task(store.update_task(task_id, task_update.to_patch()))


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Delete a specific task"""
    if not store.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    return Response(status_code=204)
