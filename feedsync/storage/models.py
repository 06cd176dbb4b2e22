"""Reader database record model and its Notion property mapping."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..filtering.interfaces import ExtractedImage, ImageOrigin

# Notion rejects rich text content longer than this per text object.
NOTION_TEXT_LIMIT = 2000


@dataclass
class MediaReference:
    """A named external file attached to the OGP property."""
    name: str
    url: str

    def to_notion(self) -> dict:
        return {"type": "external", "name": self.name, "external": {"url": self.url}}


def media_from_images(images: List[ExtractedImage]) -> List[MediaReference]:
    """Name extracted images the way the reader database expects them."""
    media = []
    description_index = 0
    for image in images:
        if image.origin == ImageOrigin.ENCLOSURE:
            media.append(MediaReference("OGP Image (enclosure)", image.source_url))
        else:
            description_index += 1
            media.append(MediaReference(
                f"OGP Image #{description_index} (description)", image.source_url
            ))
    return media


@dataclass
class PropertyNames:
    """Property names of the reader database."""
    title: str = "Title"
    link: str = "Link"
    published_at: str = "PublishedAt"
    description: str = "Description"
    media: str = "OGP"


@dataclass
class StoredRecord:
    """A page to be created in the reader database."""
    title: str
    link: str
    published_at: Optional[datetime] = None
    description: str = ""
    media: List[MediaReference] = field(default_factory=list)

    @property
    def published_iso(self) -> Optional[str]:
        return self.published_at.isoformat() if self.published_at else None

    def to_properties(self, names: Optional[PropertyNames] = None) -> dict:
        """Build the Notion page properties payload."""
        names = names or PropertyNames()
        properties = {
            names.title: {"title": [{"text": {"content": self.title[:NOTION_TEXT_LIMIT]}}]},
            # Notion wants null rather than "" for an empty url property
            names.link: {"url": self.link or None},
            names.published_at: {"date": {"start": self.published_iso} if self.published_at else None},
        }
        if self.description:
            properties[names.description] = {
                "rich_text": [{"text": {"content": self.description[:NOTION_TEXT_LIMIT]}}]
            }
        if self.media:
            properties[names.media] = {"files": [m.to_notion() for m in self.media]}
        return properties
