"""
Filmmaker Agent - Character-consistent scene images from a reference photo

Pipeline:
1. describe the character in the reference image
2. write N continuous scene prompts around that character
3. render every scene image through the batched executor, passing the
   reference image with each request
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from core.batching import BatchedExecutor, BatchReport
from core.errors import NoResultError, ScriptParseError
from core.models.assets import AssetKind, GeneratedAsset, extension_for, make_filename
from core.models.generation import IMAGE_MODEL, ContentPart, InlineData
from core.models.results import ResultCard

from .base import StudioAgent
from .prompts import CHARACTER_ANALYSIS_PROMPT, CHARACTER_LOCK_SUFFIX, FILMMAKER_SCENES_TEMPLATE

logger = logging.getLogger(__name__)

MIN_SCENES = 3
MAX_SCENES = 30

SCENE_PATTERN = re.compile(r"SCENE \d+:.*?(?=SCENE \d+:|$)", re.IGNORECASE | re.DOTALL)
SCENE_PREFIX = re.compile(r"SCENE \d+:\s*", re.IGNORECASE)


def parse_scenes(text: str, scene_count: int) -> List[str]:
    """``SCENE N:`` blocks, without their prefix, capped at ``scene_count``."""
    matches = SCENE_PATTERN.findall(text)
    if not matches:
        raise ScriptParseError("Failed to generate scenes. Please try again.")
    return [SCENE_PREFIX.sub("", match.strip(), count=1).strip() for match in matches[:scene_count]]


def lock_character(scene_prompt: str) -> str:
    return f"{scene_prompt}{CHARACTER_LOCK_SUFFIX}"


@dataclass
class FilmResult:
    """What a filmmaker run produced"""
    character: str
    scenes: List[str]
    cards: List[ResultCard] = field(default_factory=list)
    report: Optional[BatchReport] = None

    @property
    def succeeded(self) -> bool:
        return self.report is not None and self.report.all_succeeded


class FilmmakerAgent(StudioAgent):
    """Builds a film of still scenes around one reference character"""

    def __init__(self, session, executor: Optional[BatchedExecutor] = None):
        super().__init__(session)
        self.executor = executor or BatchedExecutor(
            batch_size=session.config.batch_size,
            inter_batch_delay=session.config.inter_batch_delay,
        )

    async def analyze_character(self, reference: InlineData) -> str:
        session = self.session
        session.status = "Analyzing character from image"

        def on_retry(attempt, delay_ms):
            session.status = f"Analyzing character... ({attempt})"

        contents = [{"parts": [ContentPart(text=CHARACTER_ANALYSIS_PROMPT), ContentPart(inline_data=reference)]}]
        return (await self._generate_text(contents, on_retry=on_retry)).strip()

    async def write_scenes(self, character: str, story: str, scene_count: int) -> List[str]:
        session = self.session
        session.status = "Creating scenes"

        def on_retry(attempt, delay_ms):
            session.status = f"Creating scenes... ({attempt})"

        prompt = FILMMAKER_SCENES_TEMPLATE.format(character=character, story=story, scene_count=scene_count)
        scenes = parse_scenes(await self._generate_text(prompt, on_retry=on_retry), scene_count)
        logger.info(f"Generated {len(scenes)} scenes")
        return scenes

    async def render_scene(self, scene_prompt: str, card: ResultCard, index: int, reference: InlineData) -> GeneratedAsset:
        """Generate one scene image into ``card``; errors propagate to the executor."""
        number = index + 1
        card.set_status(f"Generating scene {number}...")
        contents = [{"parts": [ContentPart(text=lock_character(scene_prompt)), ContentPart(inline_data=reference)]}]

        try:
            response = await self._with_retry(
                lambda: self.client.generate_content(model=IMAGE_MODEL, contents=contents),
                on_retry=lambda attempt, delay_ms: card.set_status(f"Generating scene {number}... (retry {attempt})"),
            )
            inline = response.first_inline_data()
            if inline is None:
                raise NoResultError("No image generated")
        except Exception as e:
            card.fail(f"Error: {e}")
            raise

        asset = GeneratedAsset(
            url=inline.to_data_url(),
            filename=make_filename(f"filmmaker-scene-{number}", extension_for(inline.mime_type, "png")),
            kind=AssetKind.IMAGE,
            mime_type=inline.mime_type,
            prompt=scene_prompt,
            data=inline.data,
        )
        self.session.register(card, asset)
        card.complete()
        return asset

    async def create(self, reference: InlineData, story: str, scene_count: int) -> FilmResult:
        session = self.session
        session.status = "Analyzing character reference..."

        character = await self.analyze_character(reference)
        scenes = await self.write_scenes(character, story, scene_count)
        result = FilmResult(character=character, scenes=scenes)
        total = len(scenes)
        session.status = f"Generating {total} images with consistent character..."

        def publish(scene: str, index: int) -> ResultCard:
            card = ResultCard(
                kind="scene",
                prompt=scene,
                label=f"Scene {index + 1} of {total}",
                status="Waiting to generate...",
            )
            result.cards.append(card)
            return session.board.publish(card)

        def on_batch_start(batch_number: int, first: int, last: int):
            session.status = f"Generating batch {batch_number} (scenes {first}-{last})..."

        result.report = await self.executor.run(
            scenes,
            publish=publish,
            work=lambda scene, card, index: self.render_scene(scene, card, index, reference),
            on_batch_start=on_batch_start,
        )
        return result

    def cancel(self):
        self.executor.cancel()
