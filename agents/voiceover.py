"""
Voice-over Agent - Narration for video cards and the voice mode

Smart voice-over is a two step job: the text model picks a voice, a short
point-of-view script and a delivery tone for the video, then the narrator
renders the line. The resulting narration element is bound to the card's
video so they play, pause and seek together.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from core.models.assets import AssetKind, GeneratedAsset, make_filename, to_data_url
from core.models.results import ResultCard
from core.sync import MediaElement, bind_narration

from .base import StudioAgent
from .prompts import (
    POV_NARRATION_TEMPLATE,
    PRODUCT_CATEGORIES,
    TONE_INSTRUCTIONS,
    VOICE_ANALYSIS_TEMPLATE,
)

logger = logging.getLogger(__name__)

DEFAULT_VOICE = "Erinome"
DEFAULT_SCRIPT = "Here's something incredible to witness"
DEFAULT_TONE = "Conversational storyteller"
FALLBACK_SCRIPT = "Look at this amazing moment"

MAX_SCRIPT_WORDS = 8
MIN_SCRIPT_WORDS = 3

SMART_TEMPERATURE = 1.3
AD_TEMPERATURE = 1.2
NARRATION_VOLUME = 0.8

VOICE_PATTERN = re.compile(r"VOICE:\s*([A-Za-z]+)", re.IGNORECASE)
SCRIPT_PATTERN = re.compile(r"SCRIPT:\s*(.+?)(?=\nTONE:|$)", re.IGNORECASE)
TONE_PATTERN = re.compile(r"TONE:\s*(.+?)(?=\n|$)", re.IGNORECASE)


@dataclass
class VoiceoverPlan:
    """Voice, script and delivery tone chosen for a video"""
    voice: str = DEFAULT_VOICE
    script: str = DEFAULT_SCRIPT
    tone: str = DEFAULT_TONE

    def instruction(self, video_prompt: str) -> str:
        return POV_NARRATION_TEMPLATE.format(tone=self.tone, script=self.script, video_prompt=video_prompt)


def script_words(text: str):
    return [word for word in text.split(" ") if word]


def clamp_script(text: str, max_words: int = MAX_SCRIPT_WORDS) -> str:
    """Keep at most ``max_words`` words of ``text``."""
    words = script_words(text)
    if len(words) > max_words:
        return " ".join(words[:max_words])
    return text


def parse_voice_analysis(text: str) -> VoiceoverPlan:
    """Read VOICE / SCRIPT / TONE lines; missing fields fall back to defaults."""
    text = text.strip()
    voice = VOICE_PATTERN.search(text)
    script = SCRIPT_PATTERN.search(text)
    tone = TONE_PATTERN.search(text)

    plan = VoiceoverPlan(
        voice=voice.group(1).strip() if voice else DEFAULT_VOICE,
        script=script.group(1).strip() if script else DEFAULT_SCRIPT,
        tone=tone.group(1).strip() if tone else DEFAULT_TONE,
    )

    if len(script_words(plan.script)) < MIN_SCRIPT_WORDS:
        plan.script = FALLBACK_SCRIPT
    else:
        plan.script = clamp_script(plan.script)
    return plan


def classify_product(context: str) -> str:
    """Product category for ad narration, from keywords in the analysis text."""
    context = context.lower()
    for category, keywords in PRODUCT_CATEGORIES:
        if any(keyword in context for keyword in keywords):
            return category
    return "default"


def natural_instruction(text: str, language: str, context: str) -> str:
    """Delivery instruction matching the product category and language."""
    table = TONE_INSTRUCTIONS["id-ID"] if language == "id-ID" else TONE_INSTRUCTIONS["default"]
    return table[classify_product(context)].format(text=text)


class VoiceoverAgent(StudioAgent):
    """
    Renders narration and attaches it to result cards.

    The narrator is the session's AudioProvider; its output is wrapped in
    an audio asset and registered with the card that requested it.
    """

    async def synthesize(
        self,
        text: str,
        voice: str,
        temperature: float,
        on_retry=None,
    ) -> Optional[GeneratedAsset]:
        """Render ``text``; None when the narrator has nothing to say."""
        result = await self._with_retry(
            lambda: self.session.narrator.generate_speech(text, voice_id=voice, temperature=temperature),
            on_retry=on_retry,
        )
        if not result.success or not result.audio_data:
            logger.warning(f"Narration not produced: {result.error_message}")
            return None

        asset = GeneratedAsset(
            url=to_data_url(result.audio_data, "audio/wav"),
            filename=make_filename("voice", "wav"),
            kind=AssetKind.AUDIO,
            mime_type="audio/wav",
            prompt=text,
            data=result.audio_data,
            duration=result.duration,
        )
        return asset

    def attach(self, card: ResultCard, asset: GeneratedAsset, status: str) -> MediaElement:
        """Register narration on ``card`` and bind it to the card's video."""
        self.session.register(card, asset)
        narration = MediaElement(src=asset.url, duration=asset.duration)
        card.narration = narration
        if card.media is not None:
            self.session.bind(card, bind_narration(card.media, narration, volume=NARRATION_VOLUME))
        else:
            narration.volume = NARRATION_VOLUME
        card.audio_status = status
        return narration

    async def plan(self, video_prompt: str, card: Optional[ResultCard] = None) -> VoiceoverPlan:
        on_retry = None
        if card is not None:
            def on_retry(attempt, delay_ms):
                card.audio_status = f"Analyzing content... ({attempt})"

        analysis = await self._generate_text(
            VOICE_ANALYSIS_TEMPLATE.format(video_prompt=video_prompt),
            on_retry=on_retry,
        )
        plan = parse_voice_analysis(analysis)
        logger.info(f"Voice-over plan: {plan.voice} / \"{plan.script}\" / {plan.tone}")
        return plan

    async def narrate_card(self, card: ResultCard, video_prompt: str):
        """
        Smart voice-over for a finished video card.

        Failures only touch the card's audio status; the video stays as it is.
        """
        if not self.client.has_credentials:
            return

        card.audio_status = "Analyzing content & generating voice-over..."
        try:
            plan = await self.plan(video_prompt, card)

            def on_retry(attempt, delay_ms):
                card.audio_status = f"Creating {plan.voice} voice-over... ({attempt})"

            asset = await self.synthesize(
                plan.instruction(video_prompt),
                plan.voice,
                SMART_TEMPERATURE,
                on_retry=on_retry,
            )
            if asset is None:
                card.audio_status = "Could not generate voice-over."
                return
            self.attach(card, asset, status=f"Smart voice-over ready ({plan.voice})")
        except Exception as e:
            logger.error(f"Smart voice-over generation failed: {e}")
            card.audio_status = "Voice-over generation failed."

    async def narrate_ad(self, script: str, voice: str, language: str, context: str) -> Optional[GeneratedAsset]:
        """Ad narration with a category-aware delivery instruction."""
        return await self.synthesize(natural_instruction(script, language, context), voice, AD_TEMPERATURE)

    async def voice_card(self, script: str, voice: str, temperature: float) -> ResultCard:
        """Voice mode: one card holding a narration of ``script``."""
        card = self.session.board.publish(ResultCard(kind="voice", prompt=script))
        card.set_status("Generating voice")
        try:
            asset = await self.synthesize(
                script, voice, temperature,
                on_retry=self.session.on_retry(card, "Please Wait..."),
            )
            if asset is None:
                card.fail("Failed to generate voice audio. Please try again.")
                return card
            self.attach(card, asset, status=f"Voice: {voice} | Temperature: {temperature}")
            card.complete(f"Voice: {voice} | Temperature: {temperature}")
        except Exception as e:
            logger.error(f"Voice generation failed: {e}")
            card.fail(f"Error: {e}")
        return card
