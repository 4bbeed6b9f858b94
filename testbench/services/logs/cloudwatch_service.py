"""
CloudWatch Logs Service
Reads recent log events for one service stream prefix from AWS CloudWatch Logs
"""

import asyncio
import heapq
from typing import Optional, Dict, Any, List, Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from testbench.core.config import settings
from testbench.core.logging import get_logger
from testbench.core.exceptions import ConfigurationError, LogSourceError
from testbench.models.logs import (
    LogEvent,
    ResolvedSetting,
    CloudWatchTarget,
    CloudWatchDebugSnapshot
)
from testbench.services.logs.params import format_log_events

logger = get_logger(__name__)

DEFAULT_STREAM_PREFIX = "livekit"

MISSING_SETTING_ENV = {
    "region": "CLOUDWATCH_REGION (or AWS_REGION / AWS_DEFAULT_REGION)",
    "logGroup": "CLOUDWATCH_LOG_GROUP",
}


def _resolve(
    override: Optional[str],
    env_value: Optional[str],
    default: Optional[str] = None
) -> ResolvedSetting:
    """Pick the first non-empty layer: request override, environment, default"""
    if override and override.strip():
        return ResolvedSetting(value=override.strip(), source="request")
    if env_value:
        return ResolvedSetting(value=env_value, source="env")
    if default:
        return ResolvedSetting(value=default, source="default")
    return ResolvedSetting(value=None, source="unset")


class CloudWatchLogService:
    """Service for reading log events from CloudWatch Logs"""

    def __init__(self, client_factory: Optional[Callable[[str], Any]] = None):
        self.enabled = settings.enable_cloudwatch_logs
        self.token_required = bool(settings.cloudwatch_logs_token)
        self.env_region = settings.env_region
        self.env_log_group = settings.cloudwatch_log_group
        self.env_stream_prefix = settings.cloudwatch_stream_prefix
        self.max_pages = max(1, settings.cloudwatch_max_pages)
        self._client_factory = client_factory or self._default_client

    @staticmethod
    def _default_client(region: str):
        """Build a logs client; unset credentials fall through to boto3's default chain"""
        session = boto3.Session(
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            aws_session_token=settings.aws_session_token,
            profile_name=settings.aws_profile,
            region_name=region
        )
        return session.client("logs")

    def resolve_target(
        self,
        region: Optional[str] = None,
        log_group: Optional[str] = None,
        stream_prefix: Optional[str] = None
    ) -> CloudWatchTarget:
        """
        Resolve where to read logs from for this request

        Args:
            region: Per-request region override
            log_group: Per-request log group override
            stream_prefix: Per-request stream prefix override

        Returns:
            Resolved target, each value tagged with the layer it came from
        """
        return CloudWatchTarget(
            region=_resolve(region, self.env_region),
            log_group=_resolve(log_group, self.env_log_group),
            stream_prefix=_resolve(stream_prefix, self.env_stream_prefix, DEFAULT_STREAM_PREFIX)
        )

    @staticmethod
    def credentials_presence() -> Dict[str, bool]:
        """Which AWS credential settings are present"""
        return {
            "accessKeyId": bool(settings.aws_access_key_id),
            "secretAccessKey": bool(settings.aws_secret_access_key),
            "sessionToken": bool(settings.aws_session_token),
            "profile": bool(settings.aws_profile),
        }

    def debug_snapshot(
        self,
        target: CloudWatchTarget,
        request_params: Optional[Dict[str, Any]] = None
    ) -> CloudWatchDebugSnapshot:
        """Build a troubleshooting snapshot for the resolved target"""
        return CloudWatchDebugSnapshot(
            enabled=self.enabled,
            token_required=self.token_required,
            credentials=self.credentials_presence(),
            resolved=target,
            missing=target.missing,
            request=request_params or {}
        )

    @staticmethod
    def ensure_configured(target: CloudWatchTarget) -> None:
        """
        Raises:
            ConfigurationError: Naming each setting that did not resolve
        """
        missing = target.missing
        if missing:
            hint = "Set " + ", ".join(MISSING_SETTING_ENV[name] for name in missing)
            raise ConfigurationError(
                "CloudWatch logging is not configured. Missing: " + ", ".join(missing),
                missing=missing,
                hint=hint
            )

    async def fetch_logs(
        self,
        target: CloudWatchTarget,
        service: str,
        tail: int,
        since_ms: Optional[int] = None,
        filter_pattern: Optional[str] = None
    ) -> str:
        """
        Fetch the most recent log events for a service

        Args:
            target: Resolved region, log group and stream prefix
            service: Service name, or "all" for every stream in the group
            tail: Number of most recent events to return
            since_ms: Optional start time in epoch milliseconds
            filter_pattern: Optional CloudWatch filter pattern

        Returns:
            Newline-joined log lines, oldest first
        """
        self.ensure_configured(target)

        params: Dict[str, Any] = {
            "logGroupName": target.log_group.value,
            "limit": tail,
            "interleaved": True,
        }
        if service != "all":
            params["logStreamNamePrefix"] = f"{target.stream_prefix.value}/{service}"
        if since_ms:
            params["startTime"] = since_ms
        if filter_pattern:
            params["filterPattern"] = filter_pattern

        logger.info(
            f"Fetching CloudWatch logs: group={target.log_group.value} "
            f"prefix={params.get('logStreamNamePrefix', '*')} tail={tail}"
        )

        try:
            events = await asyncio.to_thread(
                self._collect_events, target.region.value, params, tail
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"CloudWatch query failed: {e}")
            raise LogSourceError(str(e), source="cloudwatch") from e

        return format_log_events(events)

    def _collect_events(self, region: str, params: Dict[str, Any], tail: int) -> List[LogEvent]:
        """Page through matching events, keeping the newest `tail` of them"""
        client = self._client_factory(region)
        collected: List[LogEvent] = []
        next_token = None

        for _ in range(self.max_pages):
            request = dict(params)
            if next_token:
                request["nextToken"] = next_token
            response = client.filter_log_events(**request)

            for event in response.get("events", []):
                collected.append(
                    LogEvent(timestamp=event.get("timestamp"), message=event.get("message", ""))
                )

            next_token = response.get("nextToken")
            if not next_token:
                break

        return heapq.nlargest(tail, collected, key=lambda e: e.timestamp or 0)
