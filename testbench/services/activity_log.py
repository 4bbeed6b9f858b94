"""
Activity Log Service
Keeps a capped, timestamped trail of recent operator actions per page key
"""

import json
import secrets
import string
import time
from pathlib import Path
from typing import Optional, Dict, Any, List

from pydantic import ValidationError as PydanticValidationError

from testbench.core.config import settings
from testbench.core.logging import get_logger
from testbench.core.exceptions import NotFoundError, ValidationError
from testbench.models.activity import ActivityEntry, ActivityStatus

logger = get_logger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits

# Storage keys written by the server itself
OUTBOUND_ACTIVITY = "outbound-activity"
WEB_SESSION_ACTIVITY = "web-session-activity"
LIVE_ACTIVITY = "live-activity"
NUMBERS_ACTIVITY = "numbers-activity"


def new_entry_id() -> str:
    """Entry id: epoch milliseconds plus 7 random base36 characters"""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"{int(time.time() * 1000)}-{suffix}"


class ActivityLogStore:
    """
    File-backed ring buffers of activity entries, one per storage key

    Entries are kept newest first; adding past the cap evicts the oldest.
    """

    def __init__(self, file_path: Optional[str] = None, max_entries: Optional[int] = None):
        self.records_file = Path(file_path or settings.activity_log_file_path)
        self.max_entries = max_entries or settings.activity_log_max_entries
        self.entries: Dict[str, List[ActivityEntry]] = {}
        self._load()

    def _load(self):
        """Load entries from file, discarding it when unreadable"""
        if not self.records_file.exists():
            return
        try:
            with open(self.records_file, "r") as f:
                data = json.load(f)
            self.entries = {
                key: [ActivityEntry(**item) for item in items][: self.max_entries]
                for key, items in data.items()
            }
            logger.info(f"Loaded activity for {len(self.entries)} page(s)")
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Discarding unreadable activity log {self.records_file}: {e}")
            self.entries = {}
            self.records_file.unlink(missing_ok=True)

    def _save(self):
        try:
            data = {
                key: [entry.model_dump(mode="json", by_alias=True) for entry in items]
                for key, items in self.entries.items()
            }
            with open(self.records_file, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save activity log: {e}")

    def list(self, key: str) -> List[ActivityEntry]:
        return list(self.entries.get(key, []))

    def add(
        self,
        key: str,
        action: str,
        status: ActivityStatus = ActivityStatus.PENDING,
        details: Optional[str] = None,
        room_name: Optional[str] = None,
        api_response: Optional[Dict[str, Any]] = None
    ) -> ActivityEntry:
        """
        Add an entry at the head of a page's log

        Args:
            key: Storage key of the page (e.g. "outbound-activity")
            action: Action name (e.g. "call_initiated")
            status: Outcome so far
            details: Optional human-readable details
            room_name: Optional LiveKit room the action concerns
            api_response: Optional response payload to keep for inspection

        Returns:
            The stored entry
        """
        entry = ActivityEntry(
            id=new_entry_id(),
            action=action,
            status=status,
            details=details,
            room_name=room_name,
            api_response=api_response
        )
        self.entries[key] = ([entry] + self.entries.get(key, []))[: self.max_entries]
        self._save()
        return entry

    def update(self, key: str, entry_id: str, **changes: Any) -> ActivityEntry:
        """
        Update fields of an existing entry; id and timestamp never change

        Raises:
            NotFoundError: If the entry is not in the page's log
            ValidationError: If a change is not a valid value for its field
        """
        changes.pop("id", None)
        changes.pop("timestamp", None)

        items = self.entries.get(key, [])
        for index, entry in enumerate(items):
            if entry.id == entry_id:
                try:
                    updated = ActivityEntry.model_validate({**entry.model_dump(), **changes})
                except PydanticValidationError as e:
                    error = e.errors()[0]
                    field = ".".join(str(part) for part in error["loc"])
                    raise ValidationError(f"Invalid {field}: {error['msg']}", field=field) from e
                items[index] = updated
                self._save()
                return updated

        raise NotFoundError(
            f"Activity entry {entry_id} not found",
            details={"key": key, "id": entry_id}
        )

    def clear(self, key: str) -> int:
        """Remove every entry for a page, returning how many were removed"""
        removed = len(self.entries.pop(key, []))
        self._save()
        return removed

    def recent(self, limit: int = 10) -> List[ActivityEntry]:
        """Most recent entries across every page, newest first"""
        merged = [entry for items in self.entries.values() for entry in items]
        merged.sort(key=lambda e: e.timestamp, reverse=True)
        return merged[:limit]


# Singleton instance
_activity_log: Optional[ActivityLogStore] = None


def get_activity_log() -> ActivityLogStore:
    """Get the ActivityLogStore singleton instance"""
    global _activity_log
    if _activity_log is None:
        _activity_log = ActivityLogStore()
    return _activity_log
