"""
Data models for log retrieval
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class LogEvent(BaseModel):
    """A single log event from any source"""
    timestamp: Optional[int] = Field(None, description="Event time in epoch ms")
    message: str = ""


class LogResponse(BaseModel):
    """Normalized log blob returned by both log endpoints"""
    service: str
    tail: int
    logs: str = Field("", description="Newline-joined lines, oldest first")


class ResolvedSetting(BaseModel):
    """A configuration value and the layer it was taken from"""
    value: Optional[str] = None
    source: str = Field(..., description="request, env, default or unset")


class CloudWatchTarget(BaseModel):
    """Resolved CloudWatch location for one request"""
    region: ResolvedSetting
    log_group: ResolvedSetting = Field(..., alias="logGroup")
    stream_prefix: ResolvedSetting = Field(..., alias="streamPrefix")

    model_config = {"populate_by_name": True}

    @property
    def missing(self) -> List[str]:
        missing = []
        if not self.region.value:
            missing.append("region")
        if not self.log_group.value:
            missing.append("logGroup")
        return missing


class CloudWatchDebugSnapshot(BaseModel):
    """Troubleshooting report; holds presence flags, never secret values"""
    debug: bool = True
    enabled: bool
    token_required: bool = Field(..., alias="tokenRequired")
    credentials: Dict[str, bool]
    resolved: CloudWatchTarget
    missing: List[str] = Field(default_factory=list)
    request: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}
