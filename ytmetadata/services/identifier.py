"""Resolve a library title to the YouTube video ID embedded in its file name."""

import re
from typing import Optional

import structlog

from ytmetadata.providers.base import LibraryManager
from ytmetadata.providers.exceptions import ItemNotFoundError

logger = structlog.get_logger(__name__)

# 11-character video ID enclosed in square brackets, e.g. "Title [dQw4w9WgXcQ].mkv"
VIDEO_ID_PATTERN = re.compile(r"(?<=\[)[a-zA-Z0-9\-_]{11}(?=\])")


def find_video_id(path: str) -> Optional[str]:
    """
    Find the bracketed video ID in a path.

    When the path holds more than one bracketed 11-character token, the
    leftmost one is returned.

    Args:
        path: File path or name

    Returns:
        Video ID if found, None otherwise
    """
    match = VIDEO_ID_PATTERN.search(path)
    return match.group(0) if match else None


class IdentifierExtractor:
    """Extracts video IDs for library titles."""

    def __init__(self, library: LibraryManager) -> None:
        self.library = library

    def get_path_by_title(self, title: str) -> Optional[str]:
        """
        Look up the file path of the first library item with this name.

        Args:
            title: Exact item name

        Returns:
            Path of the first matching item (None if it has no path)

        Raises:
            ItemNotFoundError: If no library item has this name
        """
        items = self.library.get_items_by_name(title)
        if not items:
            raise ItemNotFoundError(f"No library item named {title!r}")

        if len(items) > 1:
            logger.debug("Multiple library items matched, using first", count=len(items))
        return items[0].path

    def extract_identifier(self, title: str) -> Optional[str]:
        """
        Extract the video ID for a library title.

        Args:
            title: Exact item name

        Returns:
            Video ID, or None when the item's path carries no bracketed ID

        Raises:
            ItemNotFoundError: If no library item has this name
        """
        path = self.get_path_by_title(title)
        if not path:
            logger.info("Library item has no path", title=title)
            return None

        video_id = find_video_id(path)
        if video_id is None:
            logger.info("Video ID not found in file name", path=path)
        else:
            logger.debug("Video ID extracted", path=path, video_id=video_id)
        return video_id
