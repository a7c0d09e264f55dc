"""Data models for the metadata provider."""

from ytmetadata.models.metadata import MetadataResult, Movie, MovieInfo, PersonInfo, PersonType
from ytmetadata.models.video import (
    FetchFailure,
    FetchResult,
    FetchSuccess,
    QuotaExceeded,
    VideoSnippet,
)

__all__ = [
    "VideoSnippet",
    "FetchResult",
    "FetchSuccess",
    "QuotaExceeded",
    "FetchFailure",
    "MovieInfo",
    "Movie",
    "PersonInfo",
    "PersonType",
    "MetadataResult",
]
