"""Data models for Freepik Studio"""

from .resource import ContentType, Resource
from .generation import (
    TEXT_MODEL,
    IMAGE_MODEL,
    VIDEO_MODEL,
    InlineData,
    ContentPart,
    Candidate,
    GenerateContentResponse,
    GeneratedImage,
    GenerateImagesResponse,
    VideoRef,
    GeneratedVideo,
    OperationState,
    VideoOperation,
    SearchOptions,
)
from .assets import (
    AssetKind,
    GeneratedAsset,
    AssetRegistry,
    make_filename,
)
from .results import CardState, ResultCard, ResultBoard

__all__ = [
    # Resources
    "ContentType",
    "Resource",
    # Generation envelopes
    "TEXT_MODEL",
    "IMAGE_MODEL",
    "VIDEO_MODEL",
    "InlineData",
    "ContentPart",
    "Candidate",
    "GenerateContentResponse",
    "GeneratedImage",
    "GenerateImagesResponse",
    "VideoRef",
    "GeneratedVideo",
    "OperationState",
    "VideoOperation",
    "SearchOptions",
    # Assets
    "AssetKind",
    "GeneratedAsset",
    "AssetRegistry",
    "make_filename",
    # Result cards
    "CardState",
    "ResultCard",
    "ResultBoard",
]
