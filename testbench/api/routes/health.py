"""
Health check and status endpoints
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from testbench import __version__
from testbench.core.config import settings
from testbench.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment
    }


@router.get("/ready")
async def readiness_check():
    """
    Readiness check - reports which collaborators are configured
    """
    checks = {
        "livekit": settings.livekit_configured,
        "control_api": settings.control_api_configured,
        "cloudwatch": bool(
            settings.enable_cloudwatch_logs
            and settings.cloudwatch_log_group
            and (settings.cloudwatch_region or settings.env_region)
        )
    }
    required = ("livekit", "control_api")

    return {
        "status": "ready" if all(checks[name] for name in required) else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks
    }


@router.get("/info")
async def service_info():
    """
    Get service information and configuration (non-sensitive)
    """
    return {
        "service": "LiveKit Test Bench",
        "version": __version__,
        "environment": settings.environment,
        "livekit_url": settings.livekit_url,
        "agent_name": settings.livekit_agent_name,
        "control_api_configured": settings.control_api_configured,
        "cloudwatch_logs_enabled": settings.enable_cloudwatch_logs,
        "local_logs_enabled": settings.enable_local_logs and not settings.is_production
    }
