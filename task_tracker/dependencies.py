from fastapi import Request

from .config import Settings
from .store import TaskStore


def get_store(request: Request) -> TaskStore:
    """Dependency to get the process-wide task store"""
    return request.app.state.task_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
