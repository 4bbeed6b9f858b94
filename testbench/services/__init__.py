"""Services for the Test Bench"""

from .logs import CloudWatchLogService, DockerComposeLogService
from .livekit import LiveKitRoomService
from .control_api import ControlAPIService
from .activity_log import ActivityLogStore, get_activity_log

__all__ = [
    "CloudWatchLogService",
    "DockerComposeLogService",
    "LiveKitRoomService",
    "ControlAPIService",
    "ActivityLogStore",
    "get_activity_log"
]
