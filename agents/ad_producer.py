"""Ad Producer Agent - Product image to short video ad with narration"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Optional

from core.models.generation import ContentPart, InlineData
from core.models.results import ResultCard

from .base import StudioAgent
from .prompts import AD_ANALYSIS_TEMPLATE, language_name
from .video_generator import VideoGeneratorAgent
from .voiceover import MAX_SCRIPT_WORDS, MIN_SCRIPT_WORDS, VoiceoverAgent, clamp_script, script_words

logger = logging.getLogger(__name__)

VIDEO_PROMPT_PATTERN = re.compile(r"VIDEO_PROMPT:\s*(.+?)(?=\n\w+:|$)", re.DOTALL)
VOICEOVER_PATTERN = re.compile(r"VOICEOVER_SCRIPT:\s*(.+?)(?=\n\w+:|$)", re.DOTALL)
PRODUCT_PATTERN = re.compile(r"PRODUCT:\s*(.+?)(?=\n|$)")


@dataclass
class AdAnalysis:
    """Parsed product analysis"""
    video_prompt: str
    voiceover_script: str
    product: Optional[str] = None
    raw: str = ""

    @property
    def narratable(self) -> bool:
        """Scripts of 3 to 8 words fit an 8-second spot."""
        return MIN_SCRIPT_WORDS <= len(script_words(self.voiceover_script)) <= MAX_SCRIPT_WORDS


def parse_ad_analysis(text: str) -> AdAnalysis:
    """
    Pull VIDEO_PROMPT and VOICEOVER_SCRIPT out of the analysis.

    Either one missing falls back to the whole text; the script is then
    clamped to 8 words.
    """
    video = VIDEO_PROMPT_PATTERN.search(text)
    script = VOICEOVER_PATTERN.search(text)
    product = PRODUCT_PATTERN.search(text)

    voiceover = clamp_script(script.group(1).strip() if script else text)
    return AdAnalysis(
        video_prompt=video.group(1).strip() if video else text,
        voiceover_script=voiceover,
        product=product.group(1).strip() if product else None,
        raw=text,
    )


class AdProducerAgent(StudioAgent):
    """
    Analyzes a product photo, then renders the ad video and its narration
    concurrently into a single card.
    """

    def __init__(self, session, video: Optional[VideoGeneratorAgent] = None, voiceover: Optional[VoiceoverAgent] = None):
        super().__init__(session)
        self.voiceover = voiceover or VoiceoverAgent(session)
        self.video = video or VideoGeneratorAgent(session, voiceover=self.voiceover)

    async def analyze(self, image: InlineData, language: str, card: ResultCard) -> AdAnalysis:
        prompt = AD_ANALYSIS_TEMPLATE.format(language_name=language_name(language))
        contents = [{"parts": [ContentPart(text=prompt), ContentPart(inline_data=image)]}]
        text = await self._generate_text(contents, on_retry=self.session.on_retry(card, "Analyzing image..."))
        analysis = parse_ad_analysis(text)
        logger.info(f"Ad analysis: product={analysis.product!r} script=\"{analysis.voiceover_script}\"")
        return analysis

    async def create(
        self,
        image: InlineData,
        language: str = "id-ID",
        voice: str = "Kore",
        aspect_ratio: str = "16:9",
    ) -> ResultCard:
        card = self.session.board.publish(ResultCard(kind="video", prompt="", aspect_ratio=aspect_ratio))
        card.set_status("Analyzing image")

        try:
            analysis = await self.analyze(image, language, card)
        except Exception as e:
            logger.error(f"Ad generation failed: {e}")
            card.fail(f"Error: {e}")
            return card

        card.prompt = analysis.video_prompt
        card.set_status("Generating video & voiceover")

        if analysis.narratable:
            audio = self.voiceover.narrate_ad(analysis.voiceover_script, voice, language, analysis.raw)
        else:
            logger.info("Voiceover script outside 3-8 words, skipping audio generation")
            audio = asyncio.sleep(0)

        video = self.video.render(card, analysis.video_prompt, aspect_ratio, image=image, skip_voice_over=True)

        _, audio_asset = await asyncio.gather(video, audio, return_exceptions=True)
        if isinstance(audio_asset, Exception):
            logger.error(f"Ad narration failed: {audio_asset}")
            card.audio_status = "Audio generation failed"
            return card

        if audio_asset is not None and card.media is not None:
            self.voiceover.attach(card, audio_asset, status="Audio synced with video")
        return card
