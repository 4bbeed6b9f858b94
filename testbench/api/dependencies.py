"""
Route dependencies providing service instances

Services read settings when constructed, so a fresh instance per request
picks up configuration changes. Tests replace these via dependency_overrides.
"""

from testbench.services.logs import CloudWatchLogService, DockerComposeLogService
from testbench.services.livekit import LiveKitRoomService
from testbench.services.control_api import ControlAPIService
from testbench.services.activity_log import ActivityLogStore, get_activity_log


def get_cloudwatch_service() -> CloudWatchLogService:
    return CloudWatchLogService()


def get_docker_service() -> DockerComposeLogService:
    return DockerComposeLogService()


def get_room_service() -> LiveKitRoomService:
    return LiveKitRoomService()


def get_control_api() -> ControlAPIService:
    return ControlAPIService()


def get_activity_store() -> ActivityLogStore:
    """Dependency to get the activity log store"""
    return get_activity_log()
