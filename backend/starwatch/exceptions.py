"""
StarWatch exceptions.

Feed adapters never raise: a failed feed comes back as an empty FeedResult.
These are raised by the data service only when a whole collection cannot be
produced, or when a single-object lookup misses.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StarWatchError(Exception):
    """Base exception for all StarWatch errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class UpstreamUnavailable(StarWatchError):
    """Every feed a collection depends on failed, so there is nothing to serve."""

    def __init__(self, source: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"Upstream data unavailable: {source}", details)
        self.source = source


class TrackedObjectNotFound(StarWatchError):
    """No tracked object with the requested NORAD id."""

    def __init__(self, norad_id: int) -> None:
        super().__init__(f"Satellite not found: {norad_id}", {"norad_id": norad_id})
        self.norad_id = norad_id
