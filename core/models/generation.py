"""Request/response envelopes for the generation client"""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .resource import ContentType, Resource


# Model names understood by the client. Only the substrings "image" and
# "video" matter for dispatch in generate_content.
TEXT_MODEL = "freepik-text"
IMAGE_MODEL = "freepik-image"
VIDEO_MODEL = "freepik-video"


@dataclass
class InlineData:
    """Bytes embedded directly in a response part"""
    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.b64}"


@dataclass
class ContentPart:
    """One part of a multi-part prompt or response"""
    text: Optional[str] = None
    inline_data: Optional[InlineData] = None


@dataclass
class Candidate:
    parts: List[ContentPart] = field(default_factory=list)


@dataclass
class GenerateContentResponse:
    """Result of generate_content: plain text plus optional inline candidates"""
    text: str
    candidates: List[Candidate] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    def first_inline_data(self) -> Optional[InlineData]:
        """Return the first inline payload across all candidates."""
        for candidate in self.candidates:
            for part in candidate.parts:
                if part.inline_data is not None:
                    return part.inline_data
        return None


@dataclass
class GeneratedImage:
    image_bytes: bytes
    resource: Resource
    mime_type: str = "image/jpeg"

    def as_inline(self) -> InlineData:
        return InlineData(data=self.image_bytes, mime_type=self.mime_type)


@dataclass
class GenerateImagesResponse:
    generated_images: List[GeneratedImage] = field(default_factory=list)


@dataclass
class VideoRef:
    uri: str
    title: Optional[str] = None
    thumbnail: Optional[str] = None


@dataclass
class GeneratedVideo:
    video: VideoRef
    resource: Optional[Resource] = None


class OperationState(str, Enum):
    """Lifecycle of a long-running video operation"""
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class VideoOperation:
    """Envelope returned by generate_videos.

    Operations produced by the search-backed client are always complete;
    ``PENDING`` exists for callers that construct an operation ahead of time
    and resolve it through ``get_videos_operation``.
    """
    state: OperationState = OperationState.SUCCEEDED
    generated_videos: List[GeneratedVideo] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def done(self) -> bool:
        return self.state != OperationState.PENDING

    @classmethod
    def pending(cls, prompt: str, number_of_videos: int = 1, model: str = VIDEO_MODEL) -> "VideoOperation":
        """Build an unresolved operation carrying its originating request."""
        return cls(
            state=OperationState.PENDING,
            metadata={"request": {"model": model, "prompt": prompt, "number_of_videos": number_of_videos}},
        )


@dataclass
class SearchOptions:
    """Query parameters for the resource search endpoint"""
    content_type: Optional[ContentType] = None
    per_page: Optional[int] = None
    page: Optional[int] = None
    order: Optional[str] = None  # "popular" | "latest"

    def to_params(self, query: Optional[str] = None) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if query:
            params["q"] = query
        if self.content_type:
            params["content_type"] = self.content_type.value
        if self.per_page:
            params["per_page"] = str(self.per_page)
        if self.page:
            params["page"] = str(self.page)
        if self.order:
            params["order"] = self.order
        params["include_tags"] = "true"
        params["safe"] = "true"
        return params
