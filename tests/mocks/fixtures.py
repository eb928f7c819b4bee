"""Test data factories for consistent test setup"""

from typing import Any, Dict, List, Optional

from core.config import StudioConfig
from core.models.generation import InlineData
from core.providers.mock import TINY_JPEG


def make_config(**kwargs) -> StudioConfig:
    """Factory for StudioConfig with zero delays so tests run instantly"""
    defaults = {
        "api_key": "test-key",
        "retry_delay_ms": 0.0,
        "inter_batch_delay": 0.0,
        "batch_stagger": 0.0,
        "sharing_enabled": True,
    }
    defaults.update(kwargs)
    return StudioConfig(**defaults)


def make_resource_item(
    id: Any = 1,
    title: Optional[str] = "Sunset over the sea",
    preview_url: Optional[str] = "https://cdn.example.com/preview/1.jpg",
    url: Optional[str] = "https://www.freepik.com/photo/1",
    **kwargs
) -> Dict[str, Any]:
    """Factory for a raw search result record"""
    item = {"id": id}
    if title is not None:
        item["title"] = title
    if preview_url is not None:
        item["preview_url"] = preview_url
    if url is not None:
        item["url"] = url
    item.update(kwargs)
    return item


def make_search_payload(count: int = 3, envelope: str = "data", **kwargs) -> Dict[str, List[Dict[str, Any]]]:
    """Factory for a search response envelope"""
    return {
        envelope: [
            make_resource_item(
                id=i + 1,
                title=f"Resource {i + 1}",
                preview_url=f"https://cdn.example.com/preview/{i + 1}.jpg",
                url=f"https://www.freepik.com/resource/{i + 1}",
                **kwargs
            )
            for i in range(count)
        ]
    }


def make_reference_image(data: bytes = TINY_JPEG, mime_type: str = "image/jpeg") -> InlineData:
    return InlineData(data=data, mime_type=mime_type)


def make_storyboard_text(count: int = 3) -> str:
    return "\n\n".join(
        f"Scene {i}: [8-second HD 1080p video] - Beat {i}\n**SETTING**: Harbor at dusk, camera dolly in"
        for i in range(1, count + 1)
    )


def make_filmmaker_text(count: int = 3) -> str:
    return "\n".join(
        f"SCENE {i}: Wide shot - the hero walks further along the pier, step {i}"
        for i in range(1, count + 1)
    )
