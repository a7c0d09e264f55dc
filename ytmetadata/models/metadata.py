"""Host-facing metadata models.

These mirror the structures a media library hands to and expects back from
a remote metadata provider: lookup info in, a metadata result with one
movie item and its people out.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class PersonType(str, Enum):
    """Role of a person attached to an item."""

    DIRECTOR = "Director"


@dataclass
class PersonInfo:
    """A person credited on an item."""

    name: str
    type: PersonType = PersonType.DIRECTOR


@dataclass
class MovieInfo:
    """Lookup info supplied by the host library for one item."""

    name: str
    path: Optional[str] = None


@dataclass
class Movie:
    """Metadata fields filled in for a library item."""

    name: str = ""
    original_title: Optional[str] = None
    overview: str = ""
    production_year: Optional[int] = None
    premiere_date: Optional[datetime] = None


@dataclass
class MetadataResult:
    """Result returned to the host for one metadata request.

    A fresh instance is built per request; ``has_metadata`` is False when no
    identifier or remote record was available.
    """

    item: Optional[Movie] = None
    has_metadata: bool = False
    people: List[PersonInfo] = field(default_factory=list)

    def add_person(self, person: PersonInfo) -> None:
        """Attach a person to the result."""
        self.people.append(person)
