"""
Activity log API routes
"""

from typing import List
from fastapi import APIRouter, Depends, Path, Query

from testbench.models.activity import ActivityEntry, ActivityCreate, ActivityUpdate
from testbench.api.dependencies import get_activity_store
from testbench.services.activity_log import ActivityLogStore

router = APIRouter(prefix="/activity", tags=["activity"])

KEY_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"


@router.get("", response_model=List[ActivityEntry])
async def recent_activity(
    limit: int = Query(10, ge=1, le=100),
    store: ActivityLogStore = Depends(get_activity_store)
):
    """Most recent entries across every page, newest first"""
    return store.recent(limit)


@router.get("/{key}", response_model=List[ActivityEntry])
async def list_activity(
    key: str = Path(..., pattern=KEY_PATTERN),
    store: ActivityLogStore = Depends(get_activity_store)
):
    return store.list(key)


@router.post("/{key}", response_model=ActivityEntry, status_code=201)
async def add_activity(
    body: ActivityCreate,
    key: str = Path(..., pattern=KEY_PATTERN),
    store: ActivityLogStore = Depends(get_activity_store)
):
    """
    Record an action in a page's log

    The entry is placed first; the oldest entry is evicted past the cap.
    """
    return store.add(
        key,
        body.action,
        status=body.status,
        details=body.details,
        room_name=body.room_name,
        api_response=body.api_response
    )


@router.patch("/{key}/{entry_id}", response_model=ActivityEntry)
async def update_activity(
    body: ActivityUpdate,
    key: str = Path(..., pattern=KEY_PATTERN),
    entry_id: str = Path(...),
    store: ActivityLogStore = Depends(get_activity_store)
):
    """Update the status or details of an existing entry"""
    return store.update(key, entry_id, **body.model_dump(exclude_unset=True))


@router.delete("/{key}")
async def clear_activity(
    key: str = Path(..., pattern=KEY_PATTERN),
    store: ActivityLogStore = Depends(get_activity_store)
):
    removed = store.clear(key)
    return {"success": True, "removed": removed}
