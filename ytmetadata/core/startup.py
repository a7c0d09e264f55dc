"""Component wiring for the metadata provider.

The host builds one provider at startup and passes it wherever metadata is
requested; nothing here is stored in module globals.
"""

from datetime import timedelta
from typing import Optional

import structlog

from ytmetadata import __version__
from ytmetadata.core.config import Config
from ytmetadata.core.logging import configure_logging
from ytmetadata.core.metrics import MetricsCollector, initialize_metrics
from ytmetadata.providers.base import LibraryManager, VideoSnippetSource
from ytmetadata.providers.exceptions import ConfigurationError
from ytmetadata.providers.youtube import YouTubeDataApiSource
from ytmetadata.services.cache import MetadataCache, MetadataStore
from ytmetadata.services.fetcher import RemoteFetcher
from ytmetadata.services.identifier import IdentifierExtractor
from ytmetadata.services.metadata_provider import YoutubeMetadataProvider
from ytmetadata.testing.mock_api import MockYouTubeApiSource

logger = structlog.get_logger(__name__)


def create_snippet_source(config: Config) -> VideoSnippetSource:
    """
    Build the remote API source for the configuration.

    Args:
        config: Loaded configuration

    Returns:
        Mock source in test mode, the YouTube Data API source otherwise

    Raises:
        ConfigurationError: If no API key is configured outside test mode
    """
    if config.testing.test_mode:
        logger.info("Test mode enabled, using demo video records")
        return MockYouTubeApiSource()

    if not config.youtube.api_key:
        raise ConfigurationError(
            "YouTube API key is not configured. Set youtube.api_key or YTMETA_YOUTUBE_API_KEY."
        )

    return YouTubeDataApiSource(
        api_key=config.youtube.api_key,
        application_name=config.youtube.application_name,
    )


def create_metadata_provider(
    config: Config,
    library: LibraryManager,
    source: Optional[VideoSnippetSource] = None,
    setup_logging: bool = False,
) -> YoutubeMetadataProvider:
    """
    Build a metadata provider and its collaborators.

    Args:
        config: Loaded configuration
        library: Host library used to resolve titles to paths
        source: Remote API source, built from the configuration when omitted
        setup_logging: Configure structlog from the logging section

    Returns:
        Ready-to-use YoutubeMetadataProvider
    """
    if setup_logging:
        configure_logging(config.logging.level, config.logging.format)

    metrics = MetricsCollector(enabled=config.monitoring.metrics_enabled)
    if metrics.enabled:
        initialize_metrics(__version__)

    store = MetadataStore(config.cache.cache_root, metrics=metrics)
    fetcher = RemoteFetcher(
        source=source or create_snippet_source(config),
        store=store,
        max_attempts=config.youtube.max_attempts,
        quota_reset_margin=config.youtube.quota_reset_margin,
        metrics=metrics,
    )
    cache = MetadataCache(
        store=store,
        fetcher=fetcher,
        max_age=timedelta(days=config.cache.max_age_days),
        metrics=metrics,
    )
    provider = YoutubeMetadataProvider(
        extractor=IdentifierExtractor(library),
        cache=cache,
        metrics=metrics,
    )

    logger.info(
        "Metadata provider created",
        version=__version__,
        cache_root=config.cache.cache_root,
        max_age_days=config.cache.max_age_days,
        max_attempts=config.youtube.max_attempts,
        test_mode=config.testing.test_mode,
    )
    return provider
