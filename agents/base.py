"""
Base Agent Class for Freepik Studio

Every studio agent works against one StudioSession: it reaches the
generation client, retry policy, asset registry and result board through
it, so agents stay stateless between jobs.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

from core.models.generation import TEXT_MODEL
from core.retry import RetryCallback, retry_with_backoff
from core.session import StudioSession

T = TypeVar("T")


class StudioAgent:
    """
    Base class for all Freepik Studio agents.

    Provides:
    - Access to the session's generation client
    - Retry-wrapped calls using the session's retry policy
    - Shared text utilities
    """

    def __init__(self, session: StudioSession):
        """
        Args:
            session: The studio session this agent reports into
        """
        self.session = session

    @property
    def client(self):
        return self.session.client

    async def _with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        on_retry: Optional[RetryCallback] = None,
    ) -> T:
        """Run ``operation`` under the session's retry policy"""
        return await retry_with_backoff(operation, on_retry=on_retry, policy=self.session.retry_policy)

    async def _generate_text(
        self,
        contents: Any,
        on_retry: Optional[RetryCallback] = None,
        model: str = TEXT_MODEL,
    ) -> str:
        """generate_content with retry, returning the response text"""
        response = await self._with_retry(
            lambda: self.client.generate_content(model=model, contents=contents),
            on_retry=on_retry,
        )
        return response.text or ""

    def _truncate_text(self, text: str, max_length: int = 100) -> str:
        """Truncate text to max length with ellipsis"""
        if len(text) <= max_length:
            return text
        return text[:max_length - 3] + "..."
