"""Utility modules"""

from .helpers import (
    normalize_phone_number,
    is_valid_e164,
    mask_phone_number,
    epoch_seconds_to_ms,
    iso_from_epoch_ms,
    parse_json_metadata,
    utc_now
)

__all__ = [
    "normalize_phone_number",
    "is_valid_e164",
    "mask_phone_number",
    "epoch_seconds_to_ms",
    "iso_from_epoch_ms",
    "parse_json_metadata",
    "utc_now"
]
