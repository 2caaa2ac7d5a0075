import time

from fastapi import APIRouter, Depends

from ..config import Settings
from ..dependencies import get_app_settings, get_store
from ..schemas import StatsResponse
from ..store import TaskStore

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(
    store: TaskStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Task counts and priority distribution, computed on every call"""
    return StatsResponse.from_stats(
        store.stats(),
        timestamp=int(time.time() * 1000),
        version=settings.version,
    )
