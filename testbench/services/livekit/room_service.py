"""
LiveKit Room Service
Lists and deletes rooms through the LiveKit server API
"""

import asyncio
from typing import Any, List

from livekit import api

from testbench.core.config import settings
from testbench.core.logging import get_logger
from testbench.core.exceptions import ConfigurationError, LiveKitServiceError
from testbench.models.rooms import RoomInfo, ParticipantInfo, TrackInfo
from testbench.utils.helpers import epoch_seconds_to_ms, parse_json_metadata

logger = get_logger(__name__)


def get_http_host(url: str) -> str:
    """Convert a LiveKit websocket URL to the HTTP host used by the server API"""
    return url.replace("wss://", "https://", 1).replace("ws://", "http://", 1)


def _enum_name(enum_type: Any, value: Any) -> str:
    try:
        return enum_type.Name(value)
    except (ValueError, TypeError):
        return str(value)


class LiveKitRoomService:
    """Service for inspecting and removing LiveKit rooms"""

    def __init__(self):
        self.url = settings.livekit_url
        self.api_key = settings.livekit_api_key
        self.api_secret = settings.livekit_api_secret

    def _ensure_configured(self) -> None:
        missing = [
            name for name, value in (
                ("LIVEKIT_API_KEY", self.api_key),
                ("LIVEKIT_API_SECRET", self.api_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "LiveKit credentials not configured",
                missing=missing,
                hint="Set LIVEKIT_API_KEY and LIVEKIT_API_SECRET"
            )

    def _client(self) -> api.LiveKitAPI:
        return api.LiveKitAPI(get_http_host(self.url), self.api_key, self.api_secret)

    async def list_rooms(self) -> List[RoomInfo]:
        """
        List all rooms with their participants and tracks

        Participant details are fetched per room; a failure for one room
        leaves that room in the result without participants.

        Returns:
            Rooms in the order the server returned them
        """
        self._ensure_configured()
        lk = self._client()
        try:
            response = await lk.room.list_rooms(api.ListRoomsRequest())
            rooms = await asyncio.gather(
                *(self._describe_room(lk, room) for room in response.rooms)
            )
            logger.debug(f"Listed {len(rooms)} LiveKit room(s)")
            return list(rooms)
        except Exception as e:
            logger.error(f"Failed to list LiveKit rooms: {e}")
            raise LiveKitServiceError(str(e), operation="list rooms") from e
        finally:
            await lk.aclose()

    async def delete_room(self, room_name: str) -> None:
        """
        Delete a room, disconnecting every participant

        Args:
            room_name: Name of the room to delete
        """
        self._ensure_configured()
        lk = self._client()
        try:
            await lk.room.delete_room(api.DeleteRoomRequest(room=room_name))
            logger.info(f"Deleted LiveKit room {room_name}")
        except Exception as e:
            logger.error(f"Failed to delete room {room_name}: {e}")
            raise LiveKitServiceError(str(e), operation="delete room") from e
        finally:
            await lk.aclose()

    async def _describe_room(self, lk: api.LiveKitAPI, room: Any) -> RoomInfo:
        info = RoomInfo(
            name=room.name,
            sid=room.sid,
            num_participants=room.num_participants,
            max_participants=room.max_participants,
            creation_time=epoch_seconds_to_ms(room.creation_time),
            metadata=parse_json_metadata(room.metadata)
        )
        try:
            response = await lk.room.list_participants(
                api.ListParticipantsRequest(room=room.name)
            )
            info.participants = [self._describe_participant(p) for p in response.participants]
        except Exception as e:
            logger.warning(f"Participant details unavailable for room {room.name}: {e}")
            info.participants = []
            info.participants_available = False
        return info

    @staticmethod
    def _describe_participant(participant: Any) -> ParticipantInfo:
        return ParticipantInfo(
            identity=participant.identity,
            name=participant.name,
            sid=participant.sid,
            state=_enum_name(api.ParticipantInfo.State, participant.state),
            joined_at=epoch_seconds_to_ms(participant.joined_at),
            tracks=[
                TrackInfo(
                    sid=track.sid,
                    type=_enum_name(api.TrackType, track.type),
                    name=track.name,
                    muted=track.muted,
                    source=_enum_name(api.TrackSource, track.source)
                )
                for track in participant.tracks
            ],
            metadata=parse_json_metadata(participant.metadata)
        )
