"""Canonical resource model shared by every generation capability"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ContentType(str, Enum):
    """Content-type filter accepted by the resource search endpoint"""
    PHOTO = "photo"
    VECTOR = "vector"
    PSD = "psd"
    ICON = "icon"
    TEMPLATE = "template"
    VIDEO = "video"
    MOCKUP = "mockup"
    BACKGROUND = "background"
    ILLUSTRATION = "illustration"

    @classmethod
    def coerce(cls, value: Any) -> Optional["ContentType"]:
        """Return the matching member, or None for unknown/empty values."""
        if isinstance(value, cls):
            return value
        if not value or not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Resource:
    """One generated or discovered asset, normalized from an upstream record.

    ``id`` is only unique within a single response batch. ``preview_url`` is
    the fetchable bytes location and ``url`` the canonical/share location;
    either may equal the other.
    """
    id: int
    title: str
    url: str
    preview_url: str
    content_type: ContentType = ContentType.PHOTO
    description: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_preview(self) -> bool:
        return bool(self.preview_url)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "preview_url": self.preview_url,
            "description": self.description,
            "tags": list(self.tags),
            "content_type": self.content_type.value,
        }
