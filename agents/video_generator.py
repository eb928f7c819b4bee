"""Video Generator Agent - Fills a result card with a searched stock video"""

import logging
from typing import Optional

from core.config import MISSING_KEY_MESSAGE
from core.errors import NoResultError
from core.models.assets import AssetKind, GeneratedAsset, make_filename
from core.models.generation import VIDEO_MODEL, InlineData
from core.models.results import ResultCard
from core.sync import MediaElement

from .base import StudioAgent
from .voiceover import VoiceoverAgent

logger = logging.getLogger(__name__)

VERTICAL_HINT = " --prefer vertical 9:16 compositions suitable for social media stories."
LANDSCAPE_HINT = " --prefer cinematic 16:9 landscape framing."
REFERENCE_NOTE = "\nReference image provided for visual context."


def build_video_prompt(prompt: str, aspect_ratio: str = "16:9", has_reference: bool = False) -> str:
    """Append the framing hint and, if any, the reference-image note."""
    hint = VERTICAL_HINT if aspect_ratio == "9:16" else LANDSCAPE_HINT
    enhanced = f"{prompt}{hint}"
    if has_reference:
        enhanced += REFERENCE_NOTE
    return enhanced


class VideoGeneratorAgent(StudioAgent):
    """
    Runs the video card pipeline:

    1. search for a matching video (retried until found)
    2. download the preview bytes (best effort; falls back to the remote URL)
    3. register the asset and share the bytes
    4. attach a looping media element to the card
    5. schedule smart voice-over, unless skipped
    """

    def __init__(self, session, voiceover: Optional[VoiceoverAgent] = None):
        super().__init__(session)
        self.voiceover = voiceover or VoiceoverAgent(session)

    async def render(
        self,
        card: ResultCard,
        prompt: str,
        aspect_ratio: str = "16:9",
        image: Optional[InlineData] = None,
        skip_voice_over: bool = False,
    ) -> Optional[GeneratedAsset]:
        """
        Fill ``card`` with a video for ``prompt``.

        Returns:
            The registered video asset, or None if the card failed. Errors
            are written to the card, never raised.
        """
        if not self.client.has_credentials:
            card.fail(f"Error: {MISSING_KEY_MESSAGE}")
            return None

        card.aspect_ratio = aspect_ratio
        request_prompt = build_video_prompt(prompt, aspect_ratio, has_reference=image is not None)
        reference = {"image_bytes": image.data, "mime_type": image.mime_type} if image else None

        try:
            card.set_status("Searching Freepik videos")
            operation = await self._with_retry(
                lambda: self.client.generate_videos(
                    model=VIDEO_MODEL,
                    prompt=request_prompt,
                    number_of_videos=1,
                    image=reference,
                ),
                on_retry=self.session.on_retry(card, "Searching Freepik library..."),
            )
            operation = await self.client.get_videos_operation(operation)

            if not operation.generated_videos:
                raise NoResultError("No Freepik videos were found for this prompt.")

            card.set_status("Downloading Freepik preview")
            generated = operation.generated_videos[0]
            video_url = generated.video.uri or (generated.resource.preview_url if generated.resource else None)
            if not video_url:
                raise NoResultError("Freepik did not return a video preview URL.")

            data = await self.client.fetch_media(video_url)
            asset = GeneratedAsset(
                url=video_url,
                filename=make_filename("video", "mp4"),
                kind=AssetKind.VIDEO,
                mime_type="video/mp4",
                prompt=prompt,
                data=data,
            )
            self.session.register(card, asset)

            if data:
                await self.session.share(data, "video", prompt, filename=asset.filename)

            card.media = MediaElement(src=video_url, loop=True)
            card.complete()
            logger.info(f"Video ready: {asset.filename}")
        except Exception as e:
            logger.error(f"Video generation failed: {e}")
            card.fail(f"An error occurred: {e}")
            return None

        if not skip_voice_over:
            self.session.spawn(self.voiceover.narrate_card(card, prompt))
        return asset
