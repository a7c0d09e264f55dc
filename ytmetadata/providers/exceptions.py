"""Provider-specific exceptions."""


class ProviderError(Exception):
    """Base exception for provider errors."""

    pass


class ConfigurationError(ProviderError):
    """Raised when the provider is missing required configuration."""

    pass


class ItemNotFoundError(ProviderError):
    """Raised when a title does not resolve to any library item."""

    pass


class QuotaExceededError(ProviderError):
    """Raised when the remote API daily quota is used up."""

    pass


class FetchExhaustedError(ProviderError):
    """Raised when every fetch attempt hit the quota limit."""

    pass


class VideoNotFoundError(ProviderError):
    """Raised when the remote API returns no item for an identifier."""

    pass


class RemoteApiError(ProviderError):
    """Raised when the remote API call fails for a non-quota reason."""

    pass


class CacheWriteError(ProviderError):
    """Raised when a fetched record cannot be written to the cache."""

    pass
