"""Prompt Enhancer Agent - Expands a short prompt into a cinematic description"""

import logging

from core.models.generation import TEXT_MODEL
from core.providers.base import GenerationClient

from .base import StudioAgent
from .prompts import build_enhancement_prompt

logger = logging.getLogger(__name__)


async def enhance_prompt(client: GenerationClient, prompt: str) -> str:
    """
    Rewrite ``prompt`` through one generate_content call.

    Returns the stripped response text, or ``prompt`` itself when the
    client has no credentials, the call fails, or the response is empty.
    Never retried.
    """
    if not client.has_credentials:
        logger.warning("Prompt enhancement skipped: no API key configured")
        return prompt

    try:
        response = await client.generate_content(
            model=TEXT_MODEL,
            contents=build_enhancement_prompt(prompt),
        )
    except Exception as e:
        logger.warning(f"Prompt enhancement failed, keeping original prompt: {e}")
        return prompt

    enhanced = (response.text or "").strip()
    return enhanced or prompt


class PromptEnhancerAgent(StudioAgent):
    """Session-bound wrapper around enhance_prompt"""

    async def run(self, prompt: str) -> str:
        if not prompt.strip():
            return prompt
        enhanced = await enhance_prompt(self.client, prompt)
        if enhanced != prompt:
            logger.info(f"Enhanced prompt: {self._truncate_text(enhanced)}")
        return enhanced
