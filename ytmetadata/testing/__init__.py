"""Testing module for test mode support."""

from ytmetadata.testing.fixtures import DEMO_VIDEOS, get_demo_video
from ytmetadata.testing.mock_api import MockYouTubeApiSource

__all__ = ["DEMO_VIDEOS", "get_demo_video", "MockYouTubeApiSource"]
