"""
Models for SIP and agent configuration records held by the Control API
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class SipTrunkConfig(BaseModel):
    """SIP trunk routing for a phone number"""
    model_config = ConfigDict(extra="allow")

    phone_number: Optional[str] = None
    inbound_trunk: Optional[str] = None
    outbound_trunk: Optional[str] = None
    region: Optional[str] = None


class AgentConfig(BaseModel):
    """Saved bundle of model selections and instructions"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    phone_number: Optional[str] = None
    agent_instructions: Optional[str] = None


class AgentConfigList(BaseModel):
    configs: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0


class NumberEntry(BaseModel):
    """A phone number with whatever SIP and agent config exists for it"""
    model_config = ConfigDict(populate_by_name=True)

    phone_number: str
    sip_config: Optional[Dict[str, Any]] = Field(None, alias="sipConfig")
    agent_config: Optional[Dict[str, Any]] = Field(None, alias="agentConfig")


class NumberListResponse(BaseModel):
    numbers: List[NumberEntry]
    count: int
    sip_count: int = Field(0, alias="sipCount")
    agent_count: int = Field(0, alias="agentCount")

    model_config = ConfigDict(populate_by_name=True)


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    active_rooms: int = Field(0, alias="activeRooms")
    total_participants: int = Field(0, alias="totalParticipants")
    registered_numbers: int = Field(0, alias="registeredNumbers")
    agent_configs: int = Field(0, alias="agentConfigs")
    errors: Dict[str, str] = Field(default_factory=dict)
