"""Tests for data models."""

from datetime import datetime, timedelta, timezone

from ytmetadata.models.metadata import MetadataResult, PersonInfo, PersonType
from ytmetadata.models.video import VideoSnippet


class TestVideoSnippet:
    """Tests for VideoSnippet."""

    def test_from_api_item(self) -> None:
        """Test snippet fields are read from an API item."""
        snippet = VideoSnippet.from_api_item(
            {
                "id": "dQw4w9WgXcQ",
                "snippet": {
                    "title": "T",
                    "description": "D",
                    "publishedAt": "2020-01-02T00:00:00Z",
                    "channelTitle": "C",
                    "tags": ["ignored"],
                },
            }
        )

        assert snippet.video_id == "dQw4w9WgXcQ"
        assert snippet.title == "T"
        assert snippet.description == "D"
        assert snippet.published_at == "2020-01-02T00:00:00Z"
        assert snippet.channel_title == "C"

    def test_from_api_item_missing_fields(self) -> None:
        """Test missing fields default to empty strings."""
        snippet = VideoSnippet.from_api_item({"id": "dQw4w9WgXcQ"})

        assert snippet.title == ""
        assert snippet.description == ""
        assert snippet.channel_title == ""
        assert snippet.published is None

    def test_published_utc_suffix(self) -> None:
        """Test a trailing Z parses as UTC."""
        snippet = VideoSnippet("id", "t", "d", "2009-10-25T06:57:33Z", "c")
        assert snippet.published == datetime(2009, 10, 25, 6, 57, 33, tzinfo=timezone.utc)

    def test_published_with_offset(self) -> None:
        """Test an explicit offset is preserved."""
        snippet = VideoSnippet("id", "t", "d", "2020-01-02T01:00:00+01:00", "c")
        published = snippet.published

        assert published is not None
        assert published.utcoffset() == timedelta(hours=1)
        assert published.astimezone(timezone.utc) == datetime(2020, 1, 2, tzinfo=timezone.utc)

    def test_published_naive_is_utc(self) -> None:
        """Test a timestamp without offset is taken as UTC."""
        snippet = VideoSnippet("id", "t", "d", "2020-01-02T00:00:00", "c")
        assert snippet.published == datetime(2020, 1, 2, tzinfo=timezone.utc)

    def test_published_invalid(self) -> None:
        """Test an unparseable timestamp gives None."""
        snippet = VideoSnippet("id", "t", "d", "yesterday", "c")
        assert snippet.published is None


class TestMetadataResult:
    """Tests for MetadataResult."""

    def test_defaults(self) -> None:
        """Test a new result has no metadata."""
        result = MetadataResult()

        assert result.item is None
        assert result.has_metadata is False
        assert result.people == []

    def test_add_person(self) -> None:
        """Test people are appended in order."""
        result = MetadataResult()
        result.add_person(PersonInfo(name="A"))
        result.add_person(PersonInfo(name="B"))

        assert [p.name for p in result.people] == ["A", "B"]
        assert all(p.type is PersonType.DIRECTOR for p in result.people)

    def test_people_not_shared(self) -> None:
        """Test default people lists are independent."""
        first = MetadataResult()
        first.add_person(PersonInfo(name="A"))

        assert MetadataResult().people == []
