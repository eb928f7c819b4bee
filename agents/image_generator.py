"""Image Generator Agent - One result card per generated image"""

import logging
from typing import List, Optional

from core.models.assets import AssetKind, GeneratedAsset, make_filename, to_data_url
from core.models.generation import IMAGE_MODEL
from core.models.results import ResultCard

from .base import StudioAgent

logger = logging.getLogger(__name__)

PERSON_GENERATION_OPTIONS = ("dont_allow", "allow_adult", "allow_all")


class ImageGeneratorAgent(StudioAgent):
    """
    Generates a set of images for one prompt.

    A processing card is shown while the search runs; on success it is
    replaced by one card per image, each registered and shared.
    """

    async def generate(
        self,
        prompt: str,
        number_of_images: int = 1,
        aspect_ratio: str = "1:1",
        person_generation: str = "allow_adult",
        image_size: Optional[str] = None,
        model: str = IMAGE_MODEL,
    ) -> List[ResultCard]:
        processing = self.session.board.publish(ResultCard(kind="image", prompt=prompt, aspect_ratio=aspect_ratio))
        processing.set_status("Generating images")

        config = {
            "aspect_ratio": aspect_ratio,
            "person_generation": person_generation,
            "output_mime_type": "image/jpeg",
        }
        if image_size:
            config["image_size"] = image_size

        try:
            response = await self._with_retry(
                lambda: self.client.generate_images(
                    model=model,
                    prompt=prompt,
                    number_of_images=number_of_images,
                    **config
                ),
                on_retry=self.session.on_retry(processing, "Searching Freepik library..."),
            )
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            processing.fail(f"Error: {e}")
            return [processing]

        cards = []
        for generated in response.generated_images:
            asset = GeneratedAsset(
                url=to_data_url(generated.image_bytes, "image/jpeg"),
                filename=make_filename("image", "jpeg"),
                kind=AssetKind.IMAGE,
                mime_type="image/jpeg",
                prompt=prompt,
                data=generated.image_bytes,
            )
            await self.session.share(generated.image_bytes, "image", prompt, filename=asset.filename)

            card = ResultCard(kind="image", prompt=prompt, aspect_ratio=aspect_ratio)
            self.session.register(card, asset)
            card.complete()
            cards.append(self.session.board.publish(card))

        self.session.board.remove(processing.card_id)
        logger.info(f"Generated {len(cards)} images for: {self._truncate_text(prompt, 60)}")
        return cards
