"""
View models for LiveKit rooms, participants and tracks
"""

from typing import Optional, List, Any
from pydantic import BaseModel, ConfigDict, Field


class TrackInfo(BaseModel):
    """A published track"""
    sid: str
    type: str = Field(..., description="Track type name (AUDIO, VIDEO, DATA)")
    name: str = ""
    muted: bool = False
    source: str = Field(..., description="Track source name (MICROPHONE, CAMERA, ...)")


class ParticipantInfo(BaseModel):
    """A participant in a room"""
    model_config = ConfigDict(populate_by_name=True)

    identity: str
    name: str = ""
    sid: str
    state: str = Field(..., description="Participant state name (JOINING, JOINED, ACTIVE, DISCONNECTED)")
    joined_at: Optional[int] = Field(None, alias="joinedAt", description="Join time in epoch ms")
    tracks: List[TrackInfo] = Field(default_factory=list)
    metadata: Any = None


class RoomInfo(BaseModel):
    """A LiveKit room with best-effort participant details"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    sid: str
    num_participants: int = Field(0, alias="numParticipants")
    max_participants: int = Field(0, alias="maxParticipants")
    creation_time: Optional[int] = Field(None, alias="creationTime", description="Creation time in epoch ms")
    metadata: Any = None
    participants: List[ParticipantInfo] = Field(default_factory=list)
    participants_available: bool = Field(
        True,
        alias="participantsAvailable",
        description="False when participant details could not be fetched"
    )


class RoomListResponse(BaseModel):
    rooms: List[RoomInfo]
    count: int


class RoomDeleteResponse(BaseModel):
    success: bool
    message: str
