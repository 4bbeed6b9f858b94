"""
Log request parameter parsing and event normalization

Shared by the CloudWatch and docker-compose log sources. Everything here is
pure so both endpoints clamp, validate and format identically.
"""

import re
from typing import Iterable, List, Optional

from testbench.core.exceptions import InvalidServiceError
from testbench.models.logs import LogEvent
from testbench.utils.helpers import iso_from_epoch_ms

CLOUDWATCH_SERVICES = ("livekit", "agent", "sip", "redis", "caddy", "all")
LOCAL_SERVICES = ("livekit", "agent", "sip", "redis", "all")

DEFAULT_SERVICE = "livekit"
DEFAULT_TAIL = 200
MIN_TAIL = 1
MAX_TAIL = 500

# Epoch values at or above this are milliseconds, below are seconds
EPOCH_MS_THRESHOLD = 1_000_000_000_000

# Leading integer, so "1700000000.5" reads as 1700000000
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def normalize_service(raw: Optional[str], allowed: Iterable[str]) -> str:
    """
    Lower-case and validate a service name

    Raises:
        InvalidServiceError: If the name is not in the allow-list
    """
    allowed = list(allowed)
    service = (raw or DEFAULT_SERVICE).strip().lower() or DEFAULT_SERVICE
    if service not in allowed:
        raise InvalidServiceError(service, allowed)
    return service


def parse_tail(raw: Optional[str]) -> int:
    """Parse the tail count; unparseable input falls back to the default"""
    value = _parse_int(raw)
    if value is None:
        return DEFAULT_TAIL
    return max(MIN_TAIL, min(value, MAX_TAIL))


def parse_since_ms(raw: Optional[str]) -> Optional[int]:
    """
    Parse a start time for CloudWatch, which expects epoch milliseconds

    Seconds are scaled up; values already in milliseconds pass through.
    Returns None when no usable start time was given.
    """
    value = _parse_int(raw)
    if value is None or value <= 0:
        return None
    if value >= EPOCH_MS_THRESHOLD:
        return value
    return value * 1000


def parse_since_seconds(raw: Optional[str]) -> int:
    """
    Parse a start time for docker-compose, which expects epoch seconds

    Returns 0 when no usable start time was given.
    """
    value = _parse_int(raw)
    if value is None or value <= 0:
        return 0
    if value >= EPOCH_MS_THRESHOLD:
        return value // 1000
    return value


def build_filter_pattern(raw: Optional[str]) -> Optional[str]:
    """Quote free text as a CloudWatch term filter, embedded quotes removed"""
    text = (raw or "").strip()
    if not text:
        return None
    return '"' + text.replace('"', "") + '"'


def format_log_events(events: Iterable[LogEvent]) -> str:
    """
    Sort events oldest first and render them as one text blob

    Each line is "<ISO timestamp> <message>", or the bare message when the
    event has no timestamp.
    """
    ordered = sorted(events, key=lambda e: e.timestamp or 0)
    lines: List[str] = []
    for event in ordered:
        message = (event.message or "").rstrip()
        if event.timestamp:
            lines.append(f"{iso_from_epoch_ms(event.timestamp)} {message}")
        else:
            lines.append(message)
    return "\n".join(lines).strip()


def filter_lines(text: str, needle: Optional[str], case_sensitive: bool = False) -> str:
    """Keep only the lines containing needle"""
    if not text or not needle:
        return text
    if case_sensitive:
        kept = [line for line in text.split("\n") if needle in line]
    else:
        lowered = needle.lower()
        kept = [line for line in text.split("\n") if lowered in line.lower()]
    return "\n".join(kept)
