"""
Resource Normalizer

The upstream search API does not keep a stable schema: previews show up
under a dozen different keys, tags may be strings or objects, ids may be
strings. All of that tolerance lives here, as ordered tuples of extractor
functions tried in sequence against the loosely-typed record. The first
extractor that yields a non-empty value wins.

Nothing in this module raises on malformed input.
"""

import time
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from .models.resource import ContentType, Resource


Extractor = Callable[[Any], Optional[Any]]


def _dig(value: Any, step: Any) -> Any:
    if isinstance(step, int):
        if isinstance(value, (list, tuple)) and -len(value) <= step < len(value):
            return value[step]
        return None
    if isinstance(value, Mapping):
        return value.get(step)
    return None


def path(*steps: Any) -> Extractor:
    """Build an extractor following dict keys / list indices, None on any miss."""
    def extract(item: Any) -> Optional[Any]:
        value = item
        for step in steps:
            value = _dig(value, step)
            if value is None:
                return None
        return value
    extract.__name__ = "path_" + "_".join(str(s) for s in steps)
    return extract


# Priority order matters: direct preview fields first, then thumbnails,
# nested asset/media wrappers, video file links, and finally generic fields.
PREVIEW_URL_EXTRACTORS: Tuple[Tuple[str, Extractor], ...] = (
    ("preview_url", path("preview_url")),
    ("previewURL", path("previewURL")),
    ("preview", path("preview")),
    ("thumbnail_url", path("thumbnail_url")),
    ("thumbnails[0].url", path("thumbnails", 0, "url")),
    ("assets.preview.url", path("assets", "preview", "url")),
    ("images.preview.url", path("images", "preview", "url")),
    ("media.preview_url", path("media", "preview_url")),
    ("video_files[0].link", path("video_files", 0, "link")),
    ("image", path("image")),
    ("url", path("url")),
)

RESOURCE_URL_EXTRACTORS: Tuple[Tuple[str, Extractor], ...] = (
    ("url", path("url")),
    ("share_url", path("share_url")),
    ("link", path("link")),
    ("download_url", path("download_url")),
    ("media.url", path("media", "url")),
)

TITLE_EXTRACTORS: Tuple[Tuple[str, Extractor], ...] = (
    ("title", path("title")),
    ("name", path("name")),
    ("description", path("description")),
)

DESCRIPTION_EXTRACTORS: Tuple[Tuple[str, Extractor], ...] = (
    ("description", path("description")),
    ("alt", path("alt")),
    ("caption", path("caption")),
)

TAG_EXTRACTORS: Tuple[Tuple[str, Extractor], ...] = (
    ("name", path("name")),
    ("title", path("title")),
    ("id", path("id")),
    ("slug", path("slug")),
)

CONTENT_TYPE_EXTRACTORS: Tuple[Tuple[str, Extractor], ...] = (
    ("type", path("type")),
    ("content_type", path("content_type")),
)

# Response envelopes: the resource list lives under one of these keys.
ENVELOPE_KEYS = ("data", "items")


def first_value(item: Any, extractors: Sequence[Tuple[str, Extractor]]) -> Optional[Any]:
    """Return the first truthy value produced by ``extractors``."""
    for _, extract in extractors:
        value = extract(item)
        if value:
            return value
    return None


def first_string(item: Any, extractors: Sequence[Tuple[str, Extractor]]) -> Optional[str]:
    value = first_value(item, extractors)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def resolve_preview_url(item: Any) -> str:
    return first_string(item, PREVIEW_URL_EXTRACTORS) or ""


def extract_tags(raw_tags: Any) -> List[str]:
    """Coalesce a mixed list of strings and tag objects into tag names.

    Objects contribute name, then title, then id, then slug. Empty results
    are dropped; order is preserved.
    """
    if not isinstance(raw_tags, (list, tuple)):
        return []
    tags = []
    for tag in raw_tags:
        if isinstance(tag, str):
            value = tag
        elif isinstance(tag, Mapping):
            value = first_string(tag, TAG_EXTRACTORS) or ""
        else:
            value = ""
        if value:
            tags.append(value)
    return tags


def _coerce_id(raw: Any) -> int:
    """Numeric id, or a millisecond timestamp when absent/non-numeric/zero."""
    if isinstance(raw, bool):
        raw = int(raw)
    try:
        value = int(float(raw)) if isinstance(raw, str) else int(raw)
    except (TypeError, ValueError, OverflowError):
        value = 0
    return value or int(time.time() * 1000)


def _resolve_content_type(item: Any, fallback: Optional[ContentType]) -> ContentType:
    for _, extract in CONTENT_TYPE_EXTRACTORS:
        content_type = ContentType.coerce(extract(item))
        if content_type:
            return content_type
    return fallback or ContentType.PHOTO


def normalize_resource(item: Any, fallback_type: Optional[ContentType] = None) -> Resource:
    """Map one upstream record into a Resource. Never raises."""
    if not isinstance(item, Mapping):
        item = {}

    preview_url = resolve_preview_url(item)
    resource_url = first_string(item, RESOURCE_URL_EXTRACTORS) or preview_url

    raw_id = item.get("id")
    title = first_string(item, TITLE_EXTRACTORS)
    if not title:
        title = f"Freepik asset {raw_id if raw_id is not None else ''}".strip()

    return Resource(
        id=_coerce_id(raw_id),
        title=title,
        url=resource_url,
        preview_url=preview_url,
        description=first_string(item, DESCRIPTION_EXTRACTORS),
        tags=tuple(extract_tags(item.get("tags"))),
        content_type=_resolve_content_type(item, fallback_type),
    )


def extract_items(payload: Any) -> List[Any]:
    """Pull the resource list out of a search response envelope."""
    if isinstance(payload, Mapping):
        for key in ENVELOPE_KEYS:
            items = payload.get(key)
            if isinstance(items, list):
                return items
    return []


def normalize_response(payload: Any, fallback_type: Optional[ContentType] = None) -> List[Resource]:
    return [normalize_resource(item, fallback_type) for item in extract_items(payload)]


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_text(contents: Any) -> str:
    """Flatten prompt contents into plain text.

    Accepts a string, a list (recursively), or an object with ``parts`` whose
    entries are strings or carry ``text``. Non-text parts are ignored and
    pieces are joined with newlines.
    """
    if isinstance(contents, str):
        return contents
    if isinstance(contents, (list, tuple)):
        pieces = [extract_text(entry) for entry in contents]
        return "\n".join(p for p in pieces if p)
    if contents is None:
        return ""
    parts = _field(contents, "parts")
    if isinstance(parts, (list, tuple)):
        pieces = []
        for part in parts:
            if isinstance(part, str):
                pieces.append(part)
            else:
                text = _field(part, "text")
                if text:
                    pieces.append(text)
        return "\n".join(p for p in pieces if p)
    return ""
