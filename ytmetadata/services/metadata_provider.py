"""Metadata provider that maps cached YouTube records onto library items."""

from typing import List, Optional

import structlog

from ytmetadata.core.logging import bind_request, clear_request
from ytmetadata.core.metrics import MetricsCollector
from ytmetadata.models.metadata import MetadataResult, Movie, MovieInfo, PersonInfo, PersonType
from ytmetadata.models.video import VideoSnippet
from ytmetadata.providers.exceptions import (
    ItemNotFoundError,
    ProviderError,
    VideoNotFoundError,
)
from ytmetadata.services.cache import MetadataCache
from ytmetadata.services.identifier import IdentifierExtractor

logger = structlog.get_logger(__name__)


def create_person(name: str) -> PersonInfo:
    """Create a director entry for a channel name."""
    return PersonInfo(name=name, type=PersonType.DIRECTOR)


def process_result(item: Movie, snippet: VideoSnippet) -> None:
    """
    Copy snippet fields onto a library item.

    Args:
        item: Item to fill in
        snippet: Cached video snippet
    """
    item.name = snippet.title
    item.overview = snippet.description

    published = snippet.published
    if published is not None:
        item.production_year = published.year
        item.premiere_date = published
    elif snippet.published_at:
        logger.warning("Unparseable publish date", published_at=snippet.published_at)


class YoutubeMetadataProvider:
    """Remote metadata provider for videos named with a bracketed YouTube ID.

    Never raises provider errors to the host: any failure is logged and an
    empty result returned.
    """

    name = "YoutubeMetadata"
    order = 1

    def __init__(
        self,
        extractor: IdentifierExtractor,
        cache: MetadataCache,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.extractor = extractor
        self.cache = cache
        self.metrics = metrics or MetricsCollector(enabled=False)

    async def get_search_results(self, info: MovieInfo) -> List[MetadataResult]:
        """Search is not supported; always returns an empty list."""
        return []

    async def get_metadata(self, info: MovieInfo) -> MetadataResult:
        """
        Get metadata for a library item.

        Args:
            info: Lookup info with the item's name

        Returns:
            MetadataResult with ``has_metadata`` True when a record was found
        """
        bind_request(info.name)
        try:
            result = await self._get_metadata(info)
        finally:
            clear_request()
        return result

    async def _get_metadata(self, info: MovieInfo) -> MetadataResult:
        result = MetadataResult()

        try:
            video_id = self.extractor.extract_identifier(info.name)
        except ItemNotFoundError as e:
            logger.warning("Library lookup failed", error=str(e))
            self.metrics.record_request("no_identifier")
            return result

        if not video_id:
            logger.info("YouTube ID not found in file name of title")
            self.metrics.record_request("no_identifier")
            return result

        logger.info("Getting metadata", video_id=video_id)

        try:
            await self.cache.ensure_fresh(video_id)
        except VideoNotFoundError:
            logger.info("Video not found on YouTube", video_id=video_id)
            self.metrics.record_request("not_found")
            return result
        except ProviderError as e:
            logger.error(
                "Failed to fetch video metadata",
                video_id=video_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            self.metrics.record_request("error")
            return result

        snippet = self.cache.load_cached(video_id)
        if snippet is None:
            logger.warning("No cached record after refresh", video_id=video_id)
            self.metrics.record_request("not_found")
            return result

        result.item = Movie(original_title=info.name)
        result.has_metadata = True
        process_result(result.item, snippet)
        result.add_person(create_person(snippet.channel_title))

        logger.info("Metadata found", video_id=video_id, video_title=snippet.title)
        self.metrics.record_request("found")
        return result
