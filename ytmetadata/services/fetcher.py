"""Remote fetch of a video record with a quota-aware retry loop.

A quota-exceeded response suspends the fetch until the next midnight UTC
plus a safety margin, then the request is tried once more.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import structlog

from ytmetadata.core.metrics import MetricsCollector
from ytmetadata.models.video import FetchFailure, QuotaExceeded
from ytmetadata.providers.base import VideoSnippetSource
from ytmetadata.providers.exceptions import (
    FetchExhaustedError,
    QuotaExceededError,
    RemoteApiError,
    VideoNotFoundError,
)
from ytmetadata.services.cache import MetadataStore

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def seconds_until_quota_reset(now: datetime) -> float:
    """
    Seconds from ``now`` until the next midnight UTC.

    Args:
        now: Current time; naive values are taken as UTC

    Returns:
        Seconds until 00:00 UTC of the following day (in (0, 86400])
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)

    next_midnight = now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
    return (next_midnight - now).total_seconds()


class RemoteFetcher:
    """Fetches one video record and persists it to the metadata store."""

    def __init__(
        self,
        source: VideoSnippetSource,
        store: MetadataStore,
        max_attempts: int = 2,
        quota_reset_margin: float = 60,
        clock: Callable[[], datetime] = utc_now,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            source: Remote API source
            store: Store the fetched record is written to
            max_attempts: Total attempts including the retry after a quota wait
            quota_reset_margin: Seconds waited past the quota reset
            clock: Returns the current time (aware, UTC)
            metrics: Metrics collector, disabled when omitted
        """
        self.source = source
        self.store = store
        self.max_attempts = max_attempts
        self.quota_reset_margin = quota_reset_margin
        self.clock = clock
        self.metrics = metrics or MetricsCollector(enabled=False)

    def quota_wait_seconds(self, outcome: QuotaExceeded) -> float:
        """
        Compute how long to wait before retrying after a quota error.

        Args:
            outcome: Quota result from the source

        Returns:
            The API-provided retry delay if any, otherwise the time until the
            next UTC midnight plus the safety margin
        """
        if outcome.retry_after is not None:
            return outcome.retry_after
        return seconds_until_quota_reset(self.clock()) + self.quota_reset_margin

    async def fetch(self, video_id: str) -> Dict[str, Any]:
        """
        Fetch the video record and write it to the store.

        The wait between attempts is a plain ``asyncio.sleep``: other requests
        keep running, and cancelling the calling task aborts the wait and the
        fetch.

        Args:
            video_id: 11-character video identifier

        Returns:
            The raw video resource that was persisted

        Raises:
            FetchExhaustedError: If every attempt hit the quota limit
            RemoteApiError: If the API call failed for another reason
            VideoNotFoundError: If the API returned no item for the ID
            CacheWriteError: If the record could not be written
        """
        logger.info("Fetching video metadata", video_id=video_id)

        for attempt in range(1, self.max_attempts + 1):
            outcome = await self.source.fetch_snippet(video_id)

            if isinstance(outcome, QuotaExceeded):
                self.metrics.record_attempt("quota_exceeded")

                if attempt >= self.max_attempts:
                    logger.error(
                        "Quota still exceeded after retry, giving up",
                        video_id=video_id,
                        attempts=attempt,
                        reason=outcome.reason,
                    )
                    raise FetchExhaustedError(
                        f"Failed to fetch {video_id} after {attempt} attempts: quota exceeded"
                    ) from QuotaExceededError(outcome.reason)

                wait_time = self.quota_wait_seconds(outcome)
                logger.warning(
                    "Quota exceeded, waiting for reset",
                    video_id=video_id,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    wait_seconds=round(wait_time, 1),
                )
                self.metrics.record_quota_wait(wait_time)
                await asyncio.sleep(wait_time)
                continue

            if isinstance(outcome, FetchFailure):
                self.metrics.record_attempt("failure")
                raise RemoteApiError(
                    f"YouTube API request for {video_id} failed: {outcome.error}"
                ) from outcome.error

            self.metrics.record_attempt("success")

            if not outcome.items:
                logger.warning("No video returned for ID", video_id=video_id)
                raise VideoNotFoundError(f"Video not found: {video_id}")

            item = outcome.items[0]
            await asyncio.to_thread(self.store.write_record, video_id, item)
            logger.info("Video metadata cached", video_id=video_id, attempts=attempt)
            return item

        raise FetchExhaustedError(f"Failed to fetch {video_id}: no attempts made")
