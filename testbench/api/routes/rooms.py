"""
LiveKit room API routes
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from testbench.core.logging import get_logger
from testbench.core.exceptions import TestBenchException, ValidationError
from testbench.models.activity import ActivityAction, ActivityStatus
from testbench.models.rooms import RoomListResponse, RoomDeleteResponse
from testbench.api.dependencies import get_room_service, get_activity_store
from testbench.services.livekit import LiveKitRoomService
from testbench.services.activity_log import ActivityLogStore, LIVE_ACTIVITY

logger = get_logger(__name__)

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("", response_model=RoomListResponse)
async def list_rooms(rooms: LiveKitRoomService = Depends(get_room_service)):
    """
    List live rooms with participants and tracks

    A room whose participants cannot be fetched is still listed, with an
    empty participant list and `participantsAvailable: false`.
    """
    items = await rooms.list_rooms()
    return RoomListResponse(rooms=items, count=len(items))


@router.delete("", response_model=RoomDeleteResponse)
async def delete_room(
    room: Optional[str] = Query(None, description="Name of the room to delete"),
    rooms: LiveKitRoomService = Depends(get_room_service),
    activity: ActivityLogStore = Depends(get_activity_store)
):
    """
    Delete a room, disconnecting every participant
    """
    if not room:
        raise ValidationError("Room name is required", field="room")

    try:
        await rooms.delete_room(room)
    except TestBenchException as e:
        activity.add(
            LIVE_ACTIVITY,
            ActivityAction.ROOM_DELETED.value,
            ActivityStatus.ERROR,
            details=e.message,
            room_name=room
        )
        raise

    activity.add(
        LIVE_ACTIVITY,
        ActivityAction.ROOM_DELETED.value,
        ActivityStatus.SUCCESS,
        room_name=room
    )
    return RoomDeleteResponse(success=True, message=f"Room {room} deleted")
