"""Abstract collaborators: the host library and the remote metadata API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ytmetadata.models.video import FetchResult


@dataclass
class LibraryItem:
    """A host library item as seen by the provider."""

    name: str
    path: Optional[str] = None


class LibraryManager(ABC):
    """Host library lookup used to resolve a title to its file path."""

    @abstractmethod
    def get_items_by_name(self, name: str) -> Sequence[LibraryItem]:
        """
        Find library items whose name matches exactly.

        Args:
            name: Item name to look up

        Returns:
            Matching items in library order (possibly empty)
        """
        pass


class InMemoryLibrary(LibraryManager):
    """Library backed by a list of items, keyed by exact name."""

    def __init__(self, items: Optional[Iterable[LibraryItem]] = None) -> None:
        self._items: Dict[str, List[LibraryItem]] = {}
        for item in items or []:
            self.add(item)

    def add(self, item: LibraryItem) -> None:
        """Add an item to the library."""
        self._items.setdefault(item.name, []).append(item)

    def get_items_by_name(self, name: str) -> Sequence[LibraryItem]:
        return list(self._items.get(name, []))


class VideoSnippetSource(ABC):
    """Remote API that returns the snippet of one video."""

    @abstractmethod
    async def fetch_snippet(self, video_id: str) -> FetchResult:
        """
        Perform exactly one remote call for a video's snippet.

        Implementations must not raise for API-level failures; they report
        them through the returned result instead.

        Args:
            video_id: 11-character video identifier

        Returns:
            FetchSuccess with the returned items, QuotaExceeded when the
            daily quota is used up, or FetchFailure for anything else
        """
        pass
