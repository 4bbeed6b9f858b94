"""Data models for the Test Bench"""

from .rooms import (
    TrackInfo,
    ParticipantInfo,
    RoomInfo,
    RoomListResponse,
    RoomDeleteResponse
)

from .logs import (
    LogEvent,
    LogResponse,
    ResolvedSetting,
    CloudWatchTarget,
    CloudWatchDebugSnapshot
)

from .session import (
    AgentSelection,
    MakeCallRequest,
    WebSessionRequest,
    CallConfiguration,
    MakeCallResponse,
    WebSessionResponse,
    ProxyHealth
)

from .configs import (
    SipTrunkConfig,
    AgentConfig,
    AgentConfigList,
    NumberEntry,
    NumberListResponse,
    DashboardStats
)

from .catalog import (
    ModelOption,
    ModelCategory,
    ProviderInfo,
    ModelDefaults
)

from .activity import (
    ActivityStatus,
    ActivityAction,
    ActivityEntry,
    ActivityCreate,
    ActivityUpdate
)

__all__ = [
    # Room models
    "TrackInfo",
    "ParticipantInfo",
    "RoomInfo",
    "RoomListResponse",
    "RoomDeleteResponse",
    # Log models
    "LogEvent",
    "LogResponse",
    "ResolvedSetting",
    "CloudWatchTarget",
    "CloudWatchDebugSnapshot",
    # Session models
    "AgentSelection",
    "MakeCallRequest",
    "WebSessionRequest",
    "CallConfiguration",
    "MakeCallResponse",
    "WebSessionResponse",
    "ProxyHealth",
    # Config models
    "SipTrunkConfig",
    "AgentConfig",
    "AgentConfigList",
    "NumberEntry",
    "NumberListResponse",
    "DashboardStats",
    # Catalog models
    "ModelOption",
    "ModelCategory",
    "ProviderInfo",
    "ModelDefaults",
    # Activity models
    "ActivityStatus",
    "ActivityAction",
    "ActivityEntry",
    "ActivityCreate",
    "ActivityUpdate"
]
