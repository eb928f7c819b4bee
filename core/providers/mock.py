"""Mock generation client for testing without API keys"""

import asyncio
import re
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple, Union

from ..errors import NoResultError, UpstreamRequestError
from ..models.generation import (
    Candidate,
    ContentPart,
    GeneratedImage,
    GeneratedVideo,
    GenerateContentResponse,
    GenerateImagesResponse,
    InlineData,
    OperationState,
    VideoOperation,
    VideoRef,
)
from ..models.resource import ContentType, Resource
from ..normalizer import extract_text
from .base import GenerationClient, GenerationProviderConfig
from .freepik import build_text_from_resources

# Smallest well-formed JPEG framing; enough for anything that sniffs magic bytes
TINY_JPEG = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"
TINY_MP4 = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom"

MOCK_CDN = "https://mock-cdn.example.com"


def _mock_resource(index: int, prompt: str, content_type: ContentType) -> Resource:
    folder = "videos" if content_type == ContentType.VIDEO else "images"
    extension = "mp4" if content_type == ContentType.VIDEO else "jpg"
    return Resource(
        id=index,
        title=f"Mock {content_type.value} {index} for {prompt[:40]}".strip(),
        url=f"{MOCK_CDN}/{folder}/mock_{index}.{extension}",
        preview_url=f"{MOCK_CDN}/previews/mock_{index}.jpg",
        content_type=content_type,
        description=f"Stock {content_type.value} matching the prompt",
        tags=("mock", content_type.value, "studio"),
    )


class MockFreepikClient(GenerationClient):
    """
    Mock client that simulates the resource-search backend without network access.

    Text responses follow the marker format each studio prompt asks for
    (VOICE/SCRIPT/TONE, SCENE N:, PRODUCT/VIDEO_PROMPT/VOICEOVER_SCRIPT),
    so every studio mode can run end to end offline.

    Used for:
    - Testing without API keys
    - `freepik-studio --mock` demos
    - Scripting failures (``fail_next``) and empty results (``empty``)
    """

    def __init__(self, config: Optional[GenerationProviderConfig] = None, latency: float = 0.0, empty: bool = False):
        super().__init__(config or GenerationProviderConfig(api_key="mock-key"))
        self.latency = latency
        self.empty = empty
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self._queued_text: Deque[str] = deque()
        self._failures = 0
        self.generation_count = 0

    @property
    def name(self) -> str:
        return "mock"

    def queue_text(self, *texts: str):
        """Responses returned, in order, by upcoming text generate_content calls."""
        self._queued_text.extend(texts)

    def fail_next(self, count: int = 1):
        """Make the next ``count`` calls raise a retryable upstream error."""
        self._failures += count

    def calls_to(self, method: str) -> List[Dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    async def _simulate(self, method: str, **kwargs):
        self.calls.append((method, kwargs))
        if self.latency:
            await asyncio.sleep(self.latency)
        if self._failures > 0:
            self._failures -= 1
            raise UpstreamRequestError("Freepik API request failed: 503 mock outage", status=503)

    def _resources(self, prompt: str, count: int, content_type: ContentType) -> List[Resource]:
        if self.empty:
            return []
        self.generation_count += 1
        base = self.generation_count * 100
        return [_mock_resource(base + i, prompt, content_type) for i in range(1, count + 1)]

    async def generate_content(self, model: str, contents: Any, **config) -> GenerateContentResponse:
        prompt = extract_text(contents).strip()
        await self._simulate("generate_content", model=model, prompt=prompt)

        if "image" in model.lower():
            resources = self._resources(prompt or "creative", 1, ContentType.PHOTO)
            if not resources:
                raise NoResultError("No matching Freepik image found for your prompt.")
            return GenerateContentResponse(
                text=resources[0].title,
                candidates=[Candidate(parts=[ContentPart(inline_data=InlineData(TINY_JPEG))])],
                raw={"resource": resources[0]},
            )

        if self._queued_text:
            return GenerateContentResponse(text=self._queued_text.popleft())
        return GenerateContentResponse(text=self._canned_text(prompt))

    def _canned_text(self, prompt: str) -> str:
        if "VOICEOVER_SCRIPT:" in prompt:
            return (
                "PRODUCT: Mock Coffee Blend\n"
                "VIDEO_PROMPT: Slow dolly across a steaming cup of coffee on a rustic wooden table\n"
                "VOICEOVER_SCRIPT: Wake up to the richest coffee in town"
            )
        if "VOICE:" in prompt and "SCRIPT:" in prompt:
            return (
                "VOICE: Puck\n"
                "SCRIPT: Watch this incredible moment unfold before us\n"
                "TONE: Excited observer sharing something amazing"
            )
        match = re.search(r"NUMBER OF SCENES:\s*(\d+)", prompt)
        if match:
            count = int(match.group(1))
            return "\n\n".join(
                f"SCENE {i}: Medium shot - the character continues the journey, step {i}"
                for i in range(1, count + 1)
            )
        match = re.search(r"Number of Scenes Required:\s*(\d+)", prompt)
        if match:
            count = int(match.group(1))
            return "\n\n".join(
                f"Scene {i}: [8-second HD 1080p video] - Story beat {i}\n"
                f"**SETTING**: A quiet street at dusk, camera tracking the hero"
                for i in range(1, count + 1)
            )
        resources = self._resources(prompt or "creative", 3, ContentType.PHOTO)
        return build_text_from_resources(prompt, resources)

    async def generate_images(
        self,
        model: str,
        prompt: str,
        number_of_images: int = 1,
        **config
    ) -> GenerateImagesResponse:
        await self._simulate("generate_images", model=model, prompt=prompt, number_of_images=number_of_images, **config)
        resources = self._resources(prompt, max(number_of_images, 1), ContentType.PHOTO)[:number_of_images]
        if not resources:
            raise NoResultError("No Freepik images found for your request.")
        return GenerateImagesResponse(
            generated_images=[GeneratedImage(image_bytes=TINY_JPEG, resource=r) for r in resources]
        )

    async def generate_videos(
        self,
        model: str,
        prompt: str,
        number_of_videos: int = 1,
        image: Optional[Union[bytes, Dict[str, Any]]] = None,
        **config
    ) -> VideoOperation:
        await self._simulate(
            "generate_videos", model=model, prompt=prompt,
            number_of_videos=number_of_videos, has_image=image is not None,
        )
        resources = self._resources(prompt, max(number_of_videos, 1), ContentType.VIDEO)
        if not resources:
            raise NoResultError("No Freepik videos found for your request.")
        return VideoOperation(
            state=OperationState.SUCCEEDED,
            generated_videos=[
                GeneratedVideo(
                    video=VideoRef(uri=r.url, title=r.title, thumbnail=r.preview_url),
                    resource=r,
                )
                for r in resources[:number_of_videos]
            ],
            metadata={"resources": resources, "provider": "mock"},
        )

    async def get_videos_operation(self, operation: VideoOperation) -> VideoOperation:
        if operation.done:
            return operation
        request = operation.metadata.get("request") or {}
        return await self.generate_videos(
            model=request.get("model", "freepik-video"),
            prompt=request.get("prompt", "creative"),
            number_of_videos=request.get("number_of_videos", 1),
        )

    async def fetch_media(self, url: str) -> Optional[bytes]:
        self.calls.append(("fetch_media", {"url": url}))
        if url.endswith(".mp4"):
            return TINY_MP4
        return TINY_JPEG

    def reset(self):
        """Reset mock state (useful for testing)"""
        self.calls.clear()
        self._queued_text.clear()
        self._failures = 0
        self.generation_count = 0
