"""Item filtering - recency, keyword and duplicate gates."""

from .interfaces import (
    SkipReason, ImageOrigin, ExtractedImage, FilterResult,
    DuplicateCheckerInterface
)
from .filters import (
    ItemFilter, parse_published, item_published_at, is_recent,
    matches_keywords, html_to_text, extract_image_urls, collect_images
)

__all__ = [
    "SkipReason", "ImageOrigin", "ExtractedImage", "FilterResult",
    "DuplicateCheckerInterface", "ItemFilter", "parse_published",
    "item_published_at", "is_recent", "matches_keywords", "html_to_text",
    "extract_image_urls", "collect_images"
]
