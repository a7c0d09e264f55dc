"""Collaborator interfaces and the YouTube Data API source."""

from ytmetadata.providers.base import (
    InMemoryLibrary,
    LibraryItem,
    LibraryManager,
    VideoSnippetSource,
)
from ytmetadata.providers.exceptions import (
    CacheWriteError,
    ConfigurationError,
    FetchExhaustedError,
    ItemNotFoundError,
    ProviderError,
    QuotaExceededError,
    RemoteApiError,
    VideoNotFoundError,
)
from ytmetadata.providers.youtube import YouTubeDataApiSource

__all__ = [
    "LibraryItem",
    "LibraryManager",
    "InMemoryLibrary",
    "VideoSnippetSource",
    "YouTubeDataApiSource",
    "ProviderError",
    "ConfigurationError",
    "ItemNotFoundError",
    "QuotaExceededError",
    "FetchExhaustedError",
    "VideoNotFoundError",
    "RemoteApiError",
    "CacheWriteError",
]
