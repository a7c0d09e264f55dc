"""Video data models for the remote metadata API and its cached records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union


@dataclass
class VideoSnippet:
    """Snippet fields consumed from a cached YouTube video record."""

    video_id: str
    title: str
    description: str
    published_at: str  # ISO 8601 as returned by the API
    channel_title: str

    @classmethod
    def from_api_item(cls, item: Dict[str, Any]) -> "VideoSnippet":
        """
        Build a snippet from a raw ``videos.list`` item.

        Args:
            item: Video resource dictionary (``{"id": ..., "snippet": {...}}``)

        Returns:
            VideoSnippet with missing string fields defaulted to ""
        """
        snippet = item.get("snippet") or {}
        return cls(
            video_id=item.get("id", ""),
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            published_at=snippet.get("publishedAt", ""),
            channel_title=snippet.get("channelTitle", ""),
        )

    @property
    def published(self) -> Optional[datetime]:
        """Publish time as an aware datetime, or None if missing or unparseable."""
        if not self.published_at:
            return None

        raw = self.published_at.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"

        try:
            value = datetime.fromisoformat(raw)
        except ValueError:
            return None

        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


@dataclass
class FetchSuccess:
    """Remote call succeeded; ``items`` holds zero or one video resource."""

    items: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class QuotaExceeded:
    """Remote call was rejected because the daily quota is used up."""

    reason: str
    retry_after: Optional[float] = None  # seconds, when the API said so


@dataclass
class FetchFailure:
    """Remote call failed for a reason that retrying will not fix."""

    error: Exception


FetchResult = Union[FetchSuccess, QuotaExceeded, FetchFailure]
