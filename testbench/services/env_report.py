"""
Environment configuration report

Tells an operator which settings are present without revealing any values.
"""

from typing import Any, Dict, Optional

from testbench.core.config import Settings
from testbench.utils.helpers import utc_now


def check_value(value: Optional[Any]) -> Dict[str, Any]:
    """Presence and length of a setting, never its value"""
    if value is None or value == "" or value is False:
        return {"status": "missing", "length": 0}
    return {"status": "set", "length": len(str(value))}


def build_env_report(settings: Settings) -> Dict[str, Any]:
    """
    Build the configuration presence report

    Args:
        settings: Application settings to inspect

    Returns:
        Per-group presence map, feature summary and hints
    """
    features = {
        "livekitConfigured": settings.livekit_configured,
        "backendConfigured": settings.control_api_configured,
        "cloudwatchEnabled": settings.enable_cloudwatch_logs,
        "localLogsEnabled": settings.enable_local_logs and not settings.is_production,
    }

    hints = []
    if not features["livekitConfigured"]:
        hints.append("LiveKit not configured - room listing and deletion will fail")
    if not features["backendConfigured"]:
        hints.append("Backend API URL not set - calls, web sessions, SIP configs and agent configs will fail")
    if not features["cloudwatchEnabled"] and not features["localLogsEnabled"]:
        hints.append("No logging enabled - set ENABLE_CLOUDWATCH_LOGS=true or ENABLE_LOCAL_LOGS=true")
    if features["cloudwatchEnabled"] and not (settings.env_region and settings.cloudwatch_log_group):
        hints.append("CloudWatch enabled but region or log group missing - pass them per request or set them")

    return {
        "timestamp": utc_now().isoformat(),
        "environment": settings.environment,
        "livekit": {
            "LIVEKIT_URL": check_value(settings.livekit_url),
            "LIVEKIT_API_KEY": check_value(settings.livekit_api_key),
            "LIVEKIT_API_SECRET": check_value(settings.livekit_api_secret),
            "LIVEKIT_AGENT_NAME": check_value(settings.livekit_agent_name),
        },
        "backend": {
            "CONTROL_API_URL": check_value(settings.control_api_url if settings.control_api_configured else None),
        },
        "cloudwatch": {
            "ENABLE_CLOUDWATCH_LOGS": check_value(settings.enable_cloudwatch_logs),
            "CLOUDWATCH_REGION": check_value(settings.env_region),
            "CLOUDWATCH_LOG_GROUP": check_value(settings.cloudwatch_log_group),
            "CLOUDWATCH_STREAM_PREFIX": check_value(settings.cloudwatch_stream_prefix),
            "CLOUDWATCH_LOGS_TOKEN": check_value(settings.cloudwatch_logs_token),
            "AWS_ACCESS_KEY_ID": check_value(settings.aws_access_key_id),
            "AWS_SECRET_ACCESS_KEY": check_value(settings.aws_secret_access_key),
        },
        "localLogs": {
            "ENABLE_LOCAL_LOGS": check_value(settings.enable_local_logs),
            "LOCAL_LOGS_COMPOSE_DIR": check_value(settings.local_logs_compose_dir),
        },
        "features": features,
        "hints": hints,
    }
