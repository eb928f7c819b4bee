"""
Studio Orchestrator - One entry point per studio mode

Each mode validates its input, publishes result cards onto the session's
board and drives the agents that fill them:

- manual:    one combined video, or a staggered batch of videos
- image:     a set of images
- voice:     narration of a script
- film:      a storyboard of 8-second scene prompts
- filmmaker: character-consistent scene images, rendered in batches
- ad:        product analysis, then video and narration in parallel

Card-level failures are written to the card and never raised. Session-level
failures (validation, storyboard and filmmaker runs) are written to
``session.status`` and raised.
"""

import asyncio
import logging
import re
from typing import List, Optional, Sequence

from agents.ad_producer import AdProducerAgent
from agents.filmmaker import MAX_SCENES, MIN_SCENES, FilmmakerAgent, FilmResult
from agents.image_generator import ImageGeneratorAgent
from agents.prompt_enhancer import PromptEnhancerAgent
from agents.storyboard import StoryboardAgent
from agents.video_generator import VideoGeneratorAgent
from agents.voiceover import VoiceoverAgent
from core.errors import ConfigurationError, ValidationError
from core.models.assets import AssetKind, GeneratedAsset
from core.models.generation import InlineData
from core.models.results import ResultCard
from core.providers.ip_probe import get_public_ip
from core.session import PromptMode, StudioMode, StudioSession

logger = logging.getLogger(__name__)

SCENE_JOINER = ". Then, a new scene of "
BATCH_SPLIT = re.compile(r"\n\s*\n")


def split_batch_prompts(text: str) -> List[str]:
    """Prompts separated by blank lines."""
    return [p.strip() for p in BATCH_SPLIT.split(text.strip()) if p.strip()]


class StudioOrchestrator:
    """
    Coordinates the studio agents for one session.

    Usage:
        async with StudioSession(client) as session:
            studio = StudioOrchestrator(session)
            await studio.manual_single(["a lighthouse at dawn"])
            await studio.wait()
    """

    def __init__(self, session: StudioSession):
        self.session = session
        self.voiceover = VoiceoverAgent(session)
        self.video_generator = VideoGeneratorAgent(session, voiceover=self.voiceover)
        self.image_generator = ImageGeneratorAgent(session)
        self.enhancer = PromptEnhancerAgent(session)
        self.storyboard = StoryboardAgent(session)
        self.filmmaker_agent = FilmmakerAgent(session)
        self.ad_producer = AdProducerAgent(session, video=self.video_generator, voiceover=self.voiceover)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _begin(self, mode: StudioMode):
        self.session.mode = mode
        self.session.status = ""

    def _reject(self, message: str):
        self.session.status = message
        raise ValidationError(message)

    def _require_credentials(self):
        try:
            self.session.require_credentials()
        except ConfigurationError as e:
            self.session.status = f"Error: {e}"
            raise

    async def wait(self):
        """Wait for background work such as voice-overs to settle."""
        await self.session.drain()

    # ------------------------------------------------------------------
    # Manual mode
    # ------------------------------------------------------------------

    async def manual_single(
        self,
        prompts: Sequence[str],
        aspect_ratio: str = "16:9",
        image: Optional[InlineData] = None,
    ) -> ResultCard:
        """Combine scene prompts into one video card."""
        self._begin(StudioMode.MANUAL)
        self.session.prompt_mode = PromptMode.SINGLE

        scenes = [p.strip() for p in prompts if p and p.strip()]
        if not scenes:
            self._reject("Please describe at least one scene.")

        combined = SCENE_JOINER.join(scenes)
        card = self.session.board.publish(ResultCard(kind="video", prompt=combined, aspect_ratio=aspect_ratio))
        await self.video_generator.render(card, combined, aspect_ratio, image=image)
        return card

    async def manual_batch(
        self,
        text: str,
        aspect_ratio: str = "16:9",
        image: Optional[InlineData] = None,
    ) -> List[ResultCard]:
        """
        One video per blank-line separated prompt.

        All cards are published before any work starts; starts are staggered
        by ``batch_stagger`` seconds per index.
        """
        self._begin(StudioMode.MANUAL)
        session = self.session
        session.prompt_mode = PromptMode.BATCH

        prompts = split_batch_prompts(text or "")
        if not prompts:
            self._reject("Please enter at least one prompt.")

        total = len(prompts)
        session.status = f"Generating {total} videos..."
        cards = [
            session.board.publish(ResultCard(
                kind="video",
                prompt=prompt,
                label=f"Video {index + 1} of {total}",
                aspect_ratio=aspect_ratio,
            ))
            for index, prompt in enumerate(prompts)
        ]

        async def staggered(index: int, card: ResultCard) -> Optional[GeneratedAsset]:
            await asyncio.sleep(index * session.config.batch_stagger)
            return await self.video_generator.render(card, card.prompt, aspect_ratio, image=image)

        tasks = [session.spawn(staggered(index, card)) for index, card in enumerate(cards)]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        failures = sum(1 for r in results if r is None or isinstance(r, BaseException))
        if failures:
            session.status = "Batch processing completed with some errors"
        else:
            session.status = f"Successfully generated {total} videos!"
        logger.info(f"Batch finished: {total - failures}/{total} videos")
        return cards

    # ------------------------------------------------------------------
    # Image and voice modes
    # ------------------------------------------------------------------

    async def images(
        self,
        prompt: str,
        number_of_images: int = 1,
        aspect_ratio: str = "1:1",
        person_generation: str = "allow_adult",
        image_size: Optional[str] = None,
    ) -> List[ResultCard]:
        self._begin(StudioMode.IMAGE)
        prompt = (prompt or "").strip()
        if not prompt:
            self._reject("Please enter a prompt for the image.")
        self._require_credentials()

        return await self.image_generator.generate(
            prompt,
            number_of_images=number_of_images,
            aspect_ratio=aspect_ratio,
            person_generation=person_generation,
            image_size=image_size,
        )

    async def voice(self, script: str, voice: str = "Kore", temperature: float = 1.0) -> ResultCard:
        self._begin(StudioMode.VOICE)
        script = (script or "").strip()
        if not script:
            self._reject("Please enter a script to generate voice.")
        self._require_credentials()

        return await self.voiceover.voice_card(script, voice, temperature)

    # ------------------------------------------------------------------
    # Film modes
    # ------------------------------------------------------------------

    async def film(self, topic: str, scene_count: int, aspect_ratio: str = "16:9") -> List[ResultCard]:
        """Storyboard: scene cards in reading order, ready for generate_scene_video."""
        self._begin(StudioMode.FILM)
        session = self.session
        topic = (topic or "").strip()
        if not topic or scene_count is None or scene_count < 1:
            self._reject("Please enter a valid film topic and number of scenes.")

        session.status = "Please Wait..."
        try:
            session.require_credentials()
            cards = await self.storyboard.create(topic, scene_count, aspect_ratio)
        except Exception as e:
            logger.error(f"Storyboard generation failed: {e}")
            session.status = f"Storyboard generation failed: {e}"
            raise

        session.status = f"Storyboard created successfully! {len(cards)} scenes ready for video generation."
        return cards

    async def filmmaker(self, reference: Optional[InlineData], story: str, scene_count: int) -> FilmResult:
        self._begin(StudioMode.FILMMAKER)
        session = self.session
        if reference is None or not reference.data:
            self._reject("Please upload an image reference for the character.")
        story = (story or "").strip()
        if not story or scene_count is None or not MIN_SCENES <= scene_count <= MAX_SCENES:
            self._reject(f"Please enter a valid story and scene count ({MIN_SCENES}-{MAX_SCENES}).")

        try:
            session.require_credentials()
            result = await self.filmmaker_agent.create(reference, story, scene_count)
        except Exception as e:
            logger.error(f"Film generation failed: {e}")
            session.status = f"Film generation failed: {e}"
            raise

        if result.report.cancelled:
            session.status = "Film generation cancelled."
        elif result.report.failed:
            session.status = (
                f"Film created with {result.report.failed} failed scenes. "
                f"{result.report.succeeded} scenes with consistent character."
            )
        else:
            session.status = f"Film created successfully! {len(result.scenes)} scenes with consistent character."
        return result

    async def generate_scene_video(self, card_id: int) -> Optional[GeneratedAsset]:
        """
        Turn a scene card into a video in place.

        Filmmaker scenes carry their generated image; it becomes the video
        reference, framing is fixed to 16:9 and no voice-over is added.
        Storyboard scenes are rendered like a manual video.
        """
        card = self.session.board.get(card_id)
        if card is None:
            raise ValidationError(f"No scene card with id {card_id}")

        reference = next(
            (InlineData(data=a.data, mime_type=a.mime_type)
             for a in card.assets if a.kind == AssetKind.IMAGE and a.data),
            None,
        )
        card.set_status(f"Generating video from {(card.label or 'scene').lower()}...")
        if reference is not None:
            return await self.video_generator.render(card, card.prompt, "16:9", image=reference, skip_voice_over=True)
        return await self.video_generator.render(card, card.prompt, card.aspect_ratio)

    # ------------------------------------------------------------------
    # Ad mode
    # ------------------------------------------------------------------

    async def ad(
        self,
        image: Optional[InlineData],
        language: str = "id-ID",
        voice: str = "Kore",
        aspect_ratio: str = "16:9",
    ) -> ResultCard:
        self._begin(StudioMode.AD)
        if image is None or not image.data:
            self._reject("Please upload a product image first.")
        self._require_credentials()

        return await self.ad_producer.create(image, language=language, voice=voice, aspect_ratio=aspect_ratio)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    async def enhance(self, prompt: str) -> str:
        return await self.enhancer.run(prompt)

    def delete_card(self, card_id: int) -> bool:
        return self.session.delete_card(card_id)

    async def probe_ip(self) -> str:
        return await get_public_ip()

    async def cancel(self):
        """Stop filmmaker batches and cancel every background task."""
        self.filmmaker_agent.cancel()
        await self.session.cancel_all()
