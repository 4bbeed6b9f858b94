"""Log retrieval services"""

from .cloudwatch_service import CloudWatchLogService
from .docker_service import DockerComposeLogService

__all__ = ["CloudWatchLogService", "DockerComposeLogService"]
