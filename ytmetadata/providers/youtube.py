"""YouTube Data API v3 snippet source."""

import asyncio
import json
from typing import Any, Dict, List, Optional

import httplib2
import structlog
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import Error as ApiClientError
from googleapiclient.errors import HttpError

from ytmetadata.core.logging import hash_api_key
from ytmetadata.models.video import FetchFailure, FetchResult, FetchSuccess, QuotaExceeded
from ytmetadata.providers.base import VideoSnippetSource
from ytmetadata.providers.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class YouTubeDataApiSource(VideoSnippetSource):
    """Fetches video snippets through the YouTube Data API."""

    # Error reasons the API uses when a key has run out of quota
    QUOTA_REASONS = frozenset(
        {
            "quotaExceeded",
            "dailyLimitExceeded",
            "rateLimitExceeded",
            "userRateLimitExceeded",
        }
    )

    def __init__(
        self,
        api_key: str,
        application_name: str = "ytmetadata",
        client: Optional[Resource] = None,
    ):
        """
        Initialize the API source.

        Args:
            api_key: YouTube Data API key
            application_name: Name sent with each request
            client: Prebuilt API resource, built from the key when omitted

        Raises:
            ConfigurationError: If no API key is given and no client is provided
        """
        if not api_key and client is None:
            raise ConfigurationError("YouTube API key is not configured")

        self.application_name = application_name
        self._client = client or build(
            "youtube", "v3", developerKey=api_key, cache_discovery=False
        )

        logger.info(
            "YouTube API source initialized",
            application_name=application_name,
            api_key=hash_api_key(api_key) if api_key else None,
        )

    async def fetch_snippet(self, video_id: str) -> FetchResult:
        request = self._client.videos().list(part="snippet", id=video_id)
        request.headers["User-Agent"] = self.application_name

        logger.debug("Requesting video snippet", video_id=video_id)

        try:
            response: Dict[str, Any] = await asyncio.to_thread(
                request.execute, http=self._new_http()
            )
        except HttpError as e:
            reason = self._error_reason(e)
            status = getattr(e.resp, "status", None)
            if reason in self.QUOTA_REASONS or status == 429:
                logger.warning("YouTube API quota exceeded", video_id=video_id, reason=reason)
                return QuotaExceeded(reason=reason or f"HTTP {status}")

            logger.error(
                "YouTube API request failed", video_id=video_id, status=status, reason=reason
            )
            return FetchFailure(error=e)
        except (OSError, httplib2.HttpLib2Error) as e:
            logger.error(
                "YouTube API transport error",
                video_id=video_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FetchFailure(error=e)
        except ApiClientError as e:
            logger.error(
                "YouTube API client error",
                video_id=video_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FetchFailure(error=e)

        items: List[Dict[str, Any]] = response.get("items") or []
        logger.debug("Video snippet received", video_id=video_id, item_count=len(items))
        return FetchSuccess(items=items)

    def _new_http(self) -> httplib2.Http:
        # httplib2.Http is not thread-safe; each worker-thread request gets its own
        return httplib2.Http()

    def _error_reason(self, error: HttpError) -> Optional[str]:
        """
        Extract the first error reason from an API error response.

        Args:
            error: HttpError raised by the client library

        Returns:
            Reason string such as "quotaExceeded", or None if absent
        """
        details = getattr(error, "error_details", None)
        if isinstance(details, list):
            for detail in details:
                if isinstance(detail, dict) and detail.get("reason"):
                    return detail["reason"]

        try:
            payload = json.loads(error.content.decode("utf-8"))
        except (AttributeError, UnicodeDecodeError, ValueError):
            return None

        errors = payload.get("error", {}).get("errors") or []
        if errors and isinstance(errors[0], dict):
            return errors[0].get("reason")
        return None
