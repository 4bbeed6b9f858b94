"""
Log retrieval API routes
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from testbench.core.logging import get_logger
from testbench.models.logs import LogResponse
from testbench.api.dependencies import get_cloudwatch_service, get_docker_service
from testbench.api.middleware import (
    verify_logs_token,
    require_cloudwatch_logs,
    require_local_logs
)
from testbench.services.logs import CloudWatchLogService, DockerComposeLogService
from testbench.services.logs.params import (
    CLOUDWATCH_SERVICES,
    LOCAL_SERVICES,
    normalize_service,
    parse_tail,
    parse_since_ms,
    parse_since_seconds,
    build_filter_pattern,
    filter_lines
)

logger = get_logger(__name__)

router = APIRouter(tags=["logs"])


@router.get(
    "/cloudwatch-logs",
    dependencies=[Depends(require_cloudwatch_logs), Depends(verify_logs_token)]
)
async def get_cloudwatch_logs(
    service: Optional[str] = Query(None, description="livekit, agent, sip, redis, caddy or all"),
    tail: Optional[str] = Query(None, description="Number of lines, clamped to 1-500"),
    since: Optional[str] = Query(None, description="Start time, epoch seconds or milliseconds"),
    filter_text: Optional[str] = Query(None, alias="filter", description="Free-text filter"),
    region: Optional[str] = Query(None, description="Region override"),
    log_group: Optional[str] = Query(None, alias="logGroup", description="Log group override"),
    stream_prefix: Optional[str] = Query(None, alias="streamPrefix", description="Stream prefix override"),
    debug: bool = Query(False, description="Return a configuration snapshot instead of logs"),
    cloudwatch: CloudWatchLogService = Depends(get_cloudwatch_service)
):
    """
    Tail logs from CloudWatch Logs

    Requires ENABLE_CLOUDWATCH_LOGS, and `Authorization: Bearer <token>`
    when CLOUDWATCH_LOGS_TOKEN is set.
    """
    target = cloudwatch.resolve_target(region, log_group, stream_prefix)

    if debug:
        snapshot = cloudwatch.debug_snapshot(target, {
            "service": service,
            "tail": tail,
            "since": since,
            "filter": filter_text,
        })
        return snapshot.model_dump(by_alias=True)

    cloudwatch.ensure_configured(target)

    service_name = normalize_service(service, CLOUDWATCH_SERVICES)
    tail_count = parse_tail(tail)

    logs = await cloudwatch.fetch_logs(
        target,
        service_name,
        tail_count,
        since_ms=parse_since_ms(since),
        filter_pattern=build_filter_pattern(filter_text)
    )
    return LogResponse(service=service_name, tail=tail_count, logs=logs)


@router.get(
    "/local-logs",
    response_model=LogResponse,
    dependencies=[Depends(require_local_logs)]
)
async def get_local_logs(
    service: Optional[str] = Query(None, description="livekit, agent, sip, redis or all"),
    tail: Optional[str] = Query(None, description="Number of lines, clamped to 1-500"),
    since: Optional[str] = Query(None, description="Start time, epoch seconds or milliseconds"),
    filter_text: Optional[str] = Query(None, alias="filter", description="Substring to keep"),
    case_sensitive: bool = Query(False, alias="caseSensitive"),
    docker: DockerComposeLogService = Depends(get_docker_service)
):
    """
    Tail logs from the local docker-compose stack (development only)
    """
    service_name = normalize_service(service, LOCAL_SERVICES)
    tail_count = parse_tail(tail)

    logs = await docker.fetch_logs(service_name, tail_count, parse_since_seconds(since))

    if filter_text and filter_text.strip():
        logs = filter_lines(logs, filter_text.strip(), case_sensitive=case_sensitive)
        logger.debug(f"Local logs for {service_name} filtered on {filter_text.strip()!r}")

    return LogResponse(service=service_name, tail=tail_count, logs=logs)
