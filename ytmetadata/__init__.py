"""YouTube metadata provider for media libraries."""

__version__ = "0.1.0"
