"""
Request and response models for outbound calls and browser web sessions
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class AgentSelection(BaseModel):
    """Model choices and instructions forwarded to the Control API"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stt: Optional[str] = Field(None, description="Speech-to-text model id")
    llm: Optional[str] = Field(None, description="LLM model id")
    tts: Optional[str] = Field(None, description="Text-to-speech model or voice id")
    agent_instructions: Optional[str] = Field(None, description="System instructions for the agent")


class MakeCallRequest(AgentSelection):
    """Request model for placing an outbound call"""
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "phoneNumber": "+14155551234",
                "callerNumber": "+15551234567",
                "stt": "deepgram/nova-2",
                "llm": "openai/gpt-4o-mini",
                "tts": "elevenlabs:pNInz6obpgDQGcFmaJgB",
                "agent_instructions": "You are a helpful voice AI assistant."
            }
        }
    )

    # Optional here so a missing number gets a 400 from the route, not a 422
    phone_number: Optional[str] = Field(None, alias="phoneNumber", description="Number to call (E.164)")
    caller_number: Optional[str] = Field(None, alias="callerNumber", description="Caller ID override (E.164)")


class WebSessionRequest(AgentSelection):
    """Request model for starting a browser voice session"""
    pass


class CallConfiguration(BaseModel):
    stt: Optional[str] = None
    llm: Optional[str] = None
    tts: Optional[str] = None


class MakeCallResponse(BaseModel):
    """Response after the Control API accepted an outbound call"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    room_name: Optional[str] = Field(None, alias="roomName")
    message: str = "Call initiated"
    value_sources: Optional[Dict[str, Any]] = None
    defaults_used: Optional[Any] = None
    configuration: CallConfiguration = Field(default_factory=CallConfiguration)


class WebSessionResponse(BaseModel):
    """Join details for a browser voice session"""
    model_config = ConfigDict(populate_by_name=True)

    token: Optional[str] = None
    room_name: Optional[str] = Field(None, alias="roomName")
    livekit_url: Optional[str] = Field(None, alias="livekitUrl")
    metadata: Optional[Any] = None
    value_sources: Optional[Dict[str, Any]] = None
    defaults_used: Optional[Any] = None


class ProxyHealth(BaseModel):
    status: str = "ok"
    service: str
    backend_url: str = Field(..., alias="backendUrl")

    model_config = ConfigDict(populate_by_name=True)
