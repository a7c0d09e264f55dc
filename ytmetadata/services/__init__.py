"""Service layer implementations."""

from ytmetadata.services.cache import MetadataCache, MetadataStore, cache_path_for
from ytmetadata.services.fetcher import RemoteFetcher, seconds_until_quota_reset
from ytmetadata.services.identifier import IdentifierExtractor, find_video_id
from ytmetadata.services.metadata_provider import YoutubeMetadataProvider

__all__ = [
    "cache_path_for",
    "MetadataStore",
    "MetadataCache",
    "RemoteFetcher",
    "seconds_until_quota_reset",
    "IdentifierExtractor",
    "find_video_id",
    "YoutubeMetadataProvider",
]
