"""
Freepik Generation Client

Presents a generative-media style surface (generate_content,
generate_images, generate_videos, get_videos_operation) on top of a single
primitive: the Freepik resource search endpoint. Nothing is synthesized
server-side; "generation" means finding the most popular matching stock
resources and materializing their previews.

API Docs: https://docs.freepik.com/api-reference/resources/get-all-resources
Auth: X-Freepik-API-Key header
"""

import logging
from typing import Any, Dict, List, Optional, Union

import aiohttp

from ..errors import ConfigurationError, NoResultError, UpstreamRequestError
from ..models.generation import (
    Candidate,
    ContentPart,
    GeneratedImage,
    GeneratedVideo,
    GenerateContentResponse,
    GenerateImagesResponse,
    InlineData,
    OperationState,
    SearchOptions,
    VideoOperation,
    VideoRef,
)
from ..models.resource import ContentType, Resource
from ..normalizer import extract_text, normalize_response
from .base import GenerationClient, GenerationProviderConfig
from .download import fetch_bytes

logger = logging.getLogger(__name__)

RESOURCES_PATH = "/v1/resources"
DEFAULT_QUERY = "creative"
SUMMARY_RESOURCE_COUNT = 6
SUMMARY_TAG_LIMIT = 6


def build_text_from_resources(prompt: str, resources: List[Resource]) -> str:
    """Render a multi-scene inspiration summary; the bare prompt if empty."""
    if not resources:
        return prompt

    lines = [f"Prompt: {prompt}", "", "Freepik inspiration:", ""]
    for index, resource in enumerate(resources, start=1):
        tags = ", ".join(resource.tags[:SUMMARY_TAG_LIMIT]) or "No tags available"
        lines.append(f"Scene {index}: {resource.title}")
        if resource.description:
            lines.append(f"Description: {resource.description}")
        lines.append(f"Tags: {tags}")
        lines.append(f"Link: {resource.url}")
        lines.append("")

    return "\n".join(lines).strip()


class FreepikClient(GenerationClient):
    """Resource-search backed generation client"""

    def __init__(self, config: Optional[GenerationProviderConfig] = None, api_key: Optional[str] = None):
        config = config or GenerationProviderConfig()
        if api_key:
            config.api_key = api_key
        super().__init__(config)

    @property
    def name(self) -> str:
        return "freepik"

    async def _request(self, path: str, params: Dict[str, str]) -> Any:
        """GET a JSON document from the API."""
        if not self.config.api_key:
            raise ConfigurationError("Freepik API key is missing.")

        url = f"{self.config.base_url.rstrip('/')}{path}"
        headers = {
            "Accept": "application/json",
            "X-Freepik-API-Key": self.config.api_key,
        }
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, params=params, headers=headers) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise UpstreamRequestError(
                            f"Freepik API request failed: {response.status} {error_text}",
                            status=response.status,
                        )
                    return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise UpstreamRequestError(f"Freepik API request failed: {e}") from e

    async def _fetch_inline(self, url: str) -> InlineData:
        """Fetch a preview and wrap it as inline JPEG data."""
        data, _ = await fetch_bytes(url, timeout=self.config.timeout)
        return InlineData(data=data, mime_type="image/jpeg")

    async def search_resources(self, query: str, options: Optional[SearchOptions] = None) -> List[Resource]:
        """Search and normalize; the one primitive every operation builds on."""
        options = options or SearchOptions()
        payload = await self._request(RESOURCES_PATH, options.to_params(query))
        resources = normalize_response(payload, options.content_type)
        logger.debug(f"Search {query!r} returned {len(resources)} resources")
        return resources

    async def generate_content(self, model: str, contents: Any, **config) -> GenerateContentResponse:
        prompt_text = extract_text(contents).strip()
        model_name = model.lower()
        is_image_model = "image" in model_name
        is_video_model = "video" in model_name

        resources = await self.search_resources(
            prompt_text or DEFAULT_QUERY,
            SearchOptions(
                content_type=ContentType.VIDEO if is_video_model else None,
                per_page=1 if is_image_model else SUMMARY_RESOURCE_COUNT,
                order="popular",
            ),
        )

        if is_image_model:
            resource = resources[0] if resources else None
            if resource is None or not resource.preview_url:
                raise NoResultError("No matching Freepik image found for your prompt.")
            inline = await self._fetch_inline(resource.preview_url)
            return GenerateContentResponse(
                text=resource.title,
                candidates=[Candidate(parts=[ContentPart(inline_data=inline)])],
                raw={"resource": resource},
            )

        return GenerateContentResponse(
            text=build_text_from_resources(prompt_text, resources),
            raw={"resources": resources},
        )

    async def generate_images(
        self,
        model: str,
        prompt: str,
        number_of_images: int = 1,
        **config
    ) -> GenerateImagesResponse:
        """
        Find ``number_of_images`` photos and inline their previews.

        Aspect ratio, person generation and image size are accepted for
        interface compatibility; the search endpoint has no equivalent.
        A preview that cannot be fetched is skipped; only an empty result
        is an error.
        """
        resources = await self.search_resources(
            prompt,
            SearchOptions(
                content_type=ContentType.PHOTO,
                per_page=max(number_of_images, 1),
                order="popular",
            ),
        )

        images = []
        for resource in resources[:number_of_images]:
            if not resource.preview_url:
                continue
            try:
                inline = await self._fetch_inline(resource.preview_url)
            except Exception as e:
                logger.warning(f"Failed to load Freepik preview image {resource.preview_url!r}: {e}")
                continue
            images.append(GeneratedImage(image_bytes=inline.data, resource=resource, mime_type=inline.mime_type))

        if not images:
            raise NoResultError("No Freepik images found for your request.")

        return GenerateImagesResponse(generated_images=images)

    async def generate_videos(
        self,
        model: str,
        prompt: str,
        number_of_videos: int = 1,
        image: Optional[Union[bytes, Dict[str, Any]]] = None,
        **config
    ) -> VideoOperation:
        """Search video resources; the returned operation is always done."""
        resources = await self.search_resources(
            prompt,
            SearchOptions(
                content_type=ContentType.VIDEO,
                per_page=max(number_of_videos, 1),
                order="popular",
            ),
        )

        if not resources:
            raise NoResultError("No Freepik videos found for your request.")

        videos = [
            GeneratedVideo(
                video=VideoRef(
                    uri=resource.url or resource.preview_url,
                    title=resource.title,
                    thumbnail=resource.preview_url,
                ),
                resource=resource,
            )
            for resource in resources[:number_of_videos]
        ]
        return VideoOperation(
            state=OperationState.SUCCEEDED,
            generated_videos=videos,
            metadata={"resources": resources, "request": {"model": model, "prompt": prompt}},
        )

    async def get_videos_operation(self, operation: VideoOperation) -> VideoOperation:
        """
        Return a finished operation unchanged; resolve a pending one.

        There is no server-side job to poll, so a pending operation is
        resolved by running the search it was created from.
        """
        if operation.done:
            return operation

        request = operation.metadata.get("request") or {}
        prompt = request.get("prompt")
        if not prompt:
            operation.state = OperationState.FAILED
            operation.error = "Operation has no originating request to resolve."
            return operation

        try:
            return await self.generate_videos(
                model=request.get("model", "freepik-video"),
                prompt=prompt,
                number_of_videos=request.get("number_of_videos", 1),
            )
        except NoResultError as e:
            operation.state = OperationState.FAILED
            operation.error = str(e)
            return operation
