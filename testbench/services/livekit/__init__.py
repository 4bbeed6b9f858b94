"""LiveKit server API services"""

from .room_service import LiveKitRoomService, get_http_host

__all__ = ["LiveKitRoomService", "get_http_host"]
