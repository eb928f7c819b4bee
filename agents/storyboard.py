"""Storyboard Agent - Turns a film topic into 8-second scene prompts"""

import logging
import re
from typing import List

from core.errors import ScriptParseError
from core.models.results import CardState, ResultCard

from .base import StudioAgent
from .prompts import build_storyboard_prompt

logger = logging.getLogger(__name__)

SCENE_DURATION = 8
SCENE_BLOCK_PATTERN = re.compile(r"Scene \d+:.*?(?=Scene \d+:|$)", re.IGNORECASE | re.DOTALL)
PARAGRAPH_SPLIT = re.compile(r"\n\n+")
MIN_PARAGRAPH_LENGTH = 100
SCENE_HINTS = ("8-second", "8 second", "camera", "scene")


def parse_storyboard(text: str, scene_count: int) -> List[str]:
    """
    Split director output into at most ``scene_count`` scene prompts.

    ``Scene N:`` blocks are preferred; otherwise long paragraphs that read
    like scene descriptions are used.

    Raises:
        ScriptParseError: Neither format yields a scene
    """
    scenes = SCENE_BLOCK_PATTERN.findall(text)
    if not scenes:
        scenes = [
            paragraph for paragraph in PARAGRAPH_SPLIT.split(text)
            if len(paragraph) > MIN_PARAGRAPH_LENGTH and any(hint in paragraph for hint in SCENE_HINTS)
        ]
        if scenes:
            logger.info(f"Found {len(scenes)} scenes using paragraph parsing")

    if not scenes:
        raise ScriptParseError("Failed to parse scenes from generated content. Please try again.")

    return [scene.strip() for scene in scenes[:scene_count]]


class StoryboardAgent(StudioAgent):
    """
    Asks the text model for a storyboard and lays it out as scene cards.

    Scene cards hold a prompt only; each can later be rendered into a video.
    Progress is reported through the session status line.
    """

    async def create(self, topic: str, scene_count: int, aspect_ratio: str = "16:9") -> List[ResultCard]:
        session = self.session
        session.status = "Discovering Freepik inspiration"

        def on_retry(attempt, delay_ms):
            session.status = f"Creating your story with AI Director... ({attempt})"

        content = await self._generate_text(build_storyboard_prompt(topic, scene_count), on_retry=on_retry)
        if not content:
            raise ScriptParseError("No content generated. Please try again.")
        logger.debug(f"Generated story:\n{content}")

        scenes = parse_storyboard(content, scene_count)
        session.status = ""

        cards = []
        for index, scene in enumerate(scenes):
            card = ResultCard(
                kind="scene",
                prompt=scene,
                label=f"Scene {index + 1}",
                status=f"Duration: {SCENE_DURATION} seconds",
                state=CardState.PENDING,
                loading=False,
                aspect_ratio=aspect_ratio,
            )
            cards.append(session.board.append(card))
        return cards
