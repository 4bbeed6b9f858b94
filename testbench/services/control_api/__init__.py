"""Backend Control API client"""

from .control_api_service import ControlAPIService

__all__ = ["ControlAPIService"]
