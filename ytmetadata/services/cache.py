"""On-disk metadata cache with a freshness window.

Each video has one JSON record at
``<cache_root>/youtubemetadata/<video_id>/ytvideo.json`` holding the raw API
item. Records are replaced atomically and never deleted; a stale record is
overwritten by the next successful fetch.
"""

import asyncio
import contextlib
import json
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union
from uuid import uuid4

import structlog

from ytmetadata.core.metrics import MetricsCollector
from ytmetadata.models.video import VideoSnippet
from ytmetadata.providers.exceptions import CacheWriteError, ProviderError

if TYPE_CHECKING:
    from ytmetadata.services.fetcher import RemoteFetcher

logger = structlog.get_logger(__name__)

CACHE_DIR_NAME = "youtubemetadata"
RECORD_FILE_NAME = "ytvideo.json"
DEFAULT_MAX_AGE = timedelta(days=2)

STATE_FRESH = "fresh"
STATE_STALE = "stale"
STATE_MISSING = "missing"


def cache_path_for(cache_root: Union[str, Path], video_id: str) -> Path:
    """Path of the cached record for a video ID."""
    return Path(cache_root) / CACHE_DIR_NAME / video_id / RECORD_FILE_NAME


class MetadataStore:
    """Reads and atomically writes cached video records."""

    def __init__(
        self, cache_root: Union[str, Path], metrics: Optional[MetricsCollector] = None
    ) -> None:
        self.cache_root = Path(cache_root)
        self.metrics = metrics or MetricsCollector(enabled=False)

    def path_for(self, video_id: str) -> Path:
        return cache_path_for(self.cache_root, video_id)

    def modified_at(self, video_id: str) -> Optional[datetime]:
        """
        Last modification time of a record.

        Args:
            video_id: Video identifier

        Returns:
            Aware UTC datetime, or None if no record exists
        """
        try:
            mtime = self.path_for(video_id).stat().st_mtime
        except (FileNotFoundError, NotADirectoryError):
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    def read_record(self, video_id: str) -> Optional[Dict[str, Any]]:
        """
        Read the raw record for a video.

        Args:
            video_id: Video identifier

        Returns:
            The stored API item, or None if absent or unreadable
        """
        path = self.path_for(video_id)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Cached record unreadable", path=str(path), error=str(e))
            return None

        if not isinstance(data, dict):
            logger.warning("Cached record has unexpected shape", path=str(path))
            return None
        return data

    def write_record(self, video_id: str, item: Dict[str, Any]) -> Path:
        """
        Write a record through a temporary file and an atomic rename.

        Readers see either the previous record or the complete new one.

        Args:
            video_id: Video identifier
            item: Raw API item to store

        Returns:
            Path of the written record

        Raises:
            CacheWriteError: If the directory or file cannot be written
        """
        path = self.path_for(video_id)
        tmp_path = path.with_name(f".{path.name}.{os.getpid()}_{uuid4().hex}.tmp")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(item, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            self.metrics.record_cache_write("failed")
            logger.error("Failed to write cached record", path=str(path), error=str(e))
            raise CacheWriteError(f"Failed to write cache record {path}: {e}") from e

        self.metrics.record_cache_write("success")
        logger.debug("Cached record written", path=str(path))
        return path


@dataclass
class _InflightFetch:
    """A shared fetch task and the number of callers waiting on it."""

    task: "asyncio.Task[Dict[str, Any]]"
    waiters: int = 0


class MetadataCache:
    """Keeps a fresh local copy of each requested video's record.

    ``ensure_fresh`` is the only gate before a record is read: callers
    await it, then call ``load_cached``. Concurrent calls for the same video
    share a single fetch.
    """

    def __init__(
        self,
        store: MetadataStore,
        fetcher: "RemoteFetcher",
        max_age: timedelta = DEFAULT_MAX_AGE,
        clock: Optional[Callable[[], datetime]] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.max_age = max_age
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.metrics = metrics or MetricsCollector(enabled=False)
        self._inflight: Dict[str, _InflightFetch] = {}

    def cache_path(self, video_id: str) -> Path:
        return self.store.path_for(video_id)

    def cache_state(self, video_id: str) -> str:
        """
        Classify the cached record for a video.

        Returns:
            "missing", "fresh" (age within max_age) or "stale"
        """
        modified = self.store.modified_at(video_id)
        if modified is None:
            return STATE_MISSING
        if self.clock() - modified <= self.max_age:
            return STATE_FRESH
        return STATE_STALE

    def is_fresh(self, video_id: str) -> bool:
        return self.cache_state(video_id) == STATE_FRESH

    async def ensure_fresh(self, video_id: str) -> None:
        """
        Make sure a fresh record exists, fetching it when missing or stale.

        A failed refresh of a stale record keeps the old record in place so
        it can still be served.

        Args:
            video_id: Video identifier

        Raises:
            ProviderError: If no record existed and the fetch failed
        """
        state = self.cache_state(video_id)
        self.metrics.record_cache_lookup(state)

        if state == STATE_FRESH:
            logger.debug("Cached record is fresh", video_id=video_id)
            return

        logger.info("Cached record needs refresh", video_id=video_id, state=state)

        try:
            await self._fetch_once(video_id)
        except ProviderError as e:
            if state != STATE_STALE:
                raise
            logger.warning(
                "Refresh failed, serving stale record",
                video_id=video_id,
                error_type=type(e).__name__,
                error=str(e),
            )

    async def _fetch_once(self, video_id: str) -> Dict[str, Any]:
        """
        Run the fetch for a video, joining one already in flight.

        The shared task is cancelled only once every waiter has been
        cancelled.
        """
        entry = self._inflight.get(video_id)
        if entry is None:
            task = asyncio.ensure_future(self.fetcher.fetch(video_id))
            entry = _InflightFetch(task=task)
            self._inflight[video_id] = entry
            task.add_done_callback(lambda t: self._fetch_done(video_id, entry))
        else:
            logger.debug("Joining in-flight fetch", video_id=video_id, waiters=entry.waiters)

        entry.waiters += 1
        try:
            return await asyncio.shield(entry.task)
        finally:
            entry.waiters -= 1
            if entry.waiters == 0 and not entry.task.done():
                logger.info("Cancelling fetch with no remaining waiters", video_id=video_id)
                entry.task.cancel()

    def _fetch_done(self, video_id: str, entry: _InflightFetch) -> None:
        if self._inflight.get(video_id) is entry:
            del self._inflight[video_id]
        # Mark the exception retrieved when every waiter was cancelled first
        if not entry.task.cancelled():
            entry.task.exception()

    def load_cached(self, video_id: str) -> Optional[VideoSnippet]:
        """
        Load the cached record for a video.

        Args:
            video_id: Video identifier

        Returns:
            VideoSnippet, or None when no usable record exists
        """
        item = self.store.read_record(video_id)
        if item is None:
            return None
        return VideoSnippet.from_api_item(item)
