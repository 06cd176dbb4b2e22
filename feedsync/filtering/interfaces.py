"""Interface definitions for item filtering."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class SkipReason(Enum):
    """Why an item was not stored. Gates run in this order."""
    STALE = "stale"
    NO_KEYWORD_MATCH = "no_keyword_match"
    DUPLICATE = "duplicate"


class ImageOrigin(Enum):
    """Where an extracted image reference was found."""
    ENCLOSURE = "enclosure"
    DESCRIPTION = "description"


@dataclass
class ExtractedImage:
    """An externally hosted image referenced by a feed item."""
    source_url: str
    origin: ImageOrigin = ImageOrigin.DESCRIPTION


@dataclass
class FilterResult:
    """Outcome of running one item through the gates."""
    accepted: bool
    reason: Optional[SkipReason] = None
    published_at: Optional[datetime] = None
    images: List[ExtractedImage] = field(default_factory=list)


class DuplicateCheckerInterface:
    """Interface for the duplicate gate's lookup."""

    async def exists_by_link(self, link: str) -> bool:
        """Return True if a stored record already has this link."""
        raise NotImplementedError
