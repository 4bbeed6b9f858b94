"""
Helper utilities shared by routes and services
"""

import json
import re
from datetime import datetime, timezone
from typing import Any, Optional


E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


def normalize_phone_number(phone: str) -> str:
    """
    Strip formatting characters from a phone number.

    Spaces, dashes, dots and parentheses are removed; a leading "+" is kept.

    Args:
        phone: Phone number as typed by the operator

    Returns:
        Phone number with formatting removed
    """
    phone = phone.strip()
    if phone.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", phone[1:])
    return re.sub(r"[^\d]", "", phone)


def is_valid_e164(phone: str) -> bool:
    """Check whether a phone number is in E.164 format"""
    return bool(E164_PATTERN.match(phone))


def mask_phone_number(phone: str, visible_digits: int = 4) -> str:
    """
    Mask a phone number for logging

    Args:
        phone: Phone number to mask
        visible_digits: Number of trailing digits to keep

    Returns:
        Masked phone number (e.g., "*******1234")
    """
    if not phone or len(phone) <= visible_digits:
        return phone
    return "*" * (len(phone) - visible_digits) + phone[-visible_digits:]


def epoch_seconds_to_ms(value: Optional[int]) -> Optional[int]:
    """Convert a LiveKit epoch-seconds value to milliseconds, 0 means unset"""
    if not value:
        return None
    return int(value) * 1000


def iso_from_epoch_ms(value: int) -> str:
    """Format epoch milliseconds as an ISO-8601 UTC string with a Z suffix"""
    dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_json_metadata(raw: Optional[str]) -> Any:
    """
    Parse a metadata string attached to a room or participant.

    Returns None for empty metadata and the raw string when it is not JSON.
    """
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
