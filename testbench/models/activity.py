"""
Data models for the operator activity log
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class ActivityStatus(str, Enum):
    """Outcome of an operator action"""
    SUCCESS = "success"
    ERROR = "error"
    PENDING = "pending"


class ActivityAction(str, Enum):
    """Known action names; other strings are accepted as-is"""
    CALL_INITIATED = "call_initiated"
    CALL_ENDED = "call_ended"
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"
    CONFIG_LOADED = "config_loaded"
    CONFIG_SAVED = "config_saved"
    ROOM_DELETED = "room_deleted"
    SYNC_COMPLETE = "sync_complete"
    ERROR = "error"


class ActivityEntry(BaseModel):
    """One entry in a page's activity log"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    action: str
    status: ActivityStatus
    details: Optional[str] = None
    room_name: Optional[str] = Field(None, alias="roomName")
    api_response: Optional[Dict[str, Any]] = Field(None, alias="apiResponse")


class ActivityCreate(BaseModel):
    """Body for adding an activity entry"""
    model_config = ConfigDict(populate_by_name=True)

    action: str = Field(..., min_length=1)
    status: ActivityStatus = ActivityStatus.PENDING
    details: Optional[str] = None
    room_name: Optional[str] = Field(None, alias="roomName")
    api_response: Optional[Dict[str, Any]] = Field(None, alias="apiResponse")


class ActivityUpdate(BaseModel):
    """Body for updating an activity entry; only set fields are applied"""
    model_config = ConfigDict(populate_by_name=True)

    action: Optional[str] = None
    status: Optional[ActivityStatus] = None
    details: Optional[str] = None
    room_name: Optional[str] = Field(None, alias="roomName")
    api_response: Optional[Dict[str, Any]] = Field(None, alias="apiResponse")
