"""Fetching remote media bytes (previews, finished videos)"""

import logging
from typing import Optional, Tuple

import httpx

from ..errors import UpstreamRequestError

logger = logging.getLogger(__name__)


async def fetch_bytes(url: str, timeout: float = 60.0) -> Tuple[bytes, str]:
    """
    GET ``url`` and return (body, content type).

    Raises:
        UpstreamRequestError: Non-2xx response or transport failure. A
            malformed URL is raised as non-retryable.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, follow_redirects=True)
    except httpx.InvalidURL as e:
        raise UpstreamRequestError(f"Failed to fetch image preview: {e}", retryable=False) from e
    except httpx.HTTPError as e:
        raise UpstreamRequestError(f"Failed to fetch image preview: {e}") from e

    if response.status_code >= 400:
        raise UpstreamRequestError(
            f"Failed to fetch image preview: {response.reason_phrase}",
            status=response.status_code,
        )
    content_type = response.headers.get("content-type", "application/octet-stream")
    return response.content, content_type.split(";")[0].strip()


async def download_bytes(url: str, timeout: float = 120.0) -> Optional[bytes]:
    """Best-effort download; returns None instead of raising."""
    try:
        data, _ = await fetch_bytes(url, timeout=timeout)
        return data
    except UpstreamRequestError as e:
        logger.warning(f"Unable to download {url} directly: {e}")
        return None
