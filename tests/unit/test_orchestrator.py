"""Tests for StudioOrchestrator mode entry points"""

from unittest.mock import AsyncMock, patch

import pytest

from core.errors import ConfigurationError, ScriptParseError, ValidationError
from core.models.assets import AssetKind
from core.models.results import CardState
from core.providers.base import GenerationProviderConfig
from core.providers.mock import MockFreepikClient
from core.session import PromptMode, StudioMode, StudioSession
from tests.mocks.fixtures import make_config
from workflows.orchestrator import SCENE_JOINER, StudioOrchestrator, split_batch_prompts


@pytest.fixture
def keyless_studio():
    client = MockFreepikClient(GenerationProviderConfig(api_key=None))
    return StudioOrchestrator(StudioSession(client, config=make_config(api_key=None)).init())


def test_split_batch_prompts():
    text = "  first prompt\n\nsecond\nstill second\n \n\n third  \n\n"
    assert split_batch_prompts(text) == ["first prompt", "second\nstill second", "third"]


# ============================================================
# Manual mode
# ============================================================

class TestManualMode:

    @pytest.mark.asyncio
    async def test_single_combines_scenes(self, studio, session, mock_client):
        card = await studio.manual_single(["a lighthouse at dawn", "  ", "waves crash below"], aspect_ratio="9:16")
        await studio.wait()

        assert session.mode == StudioMode.MANUAL
        assert session.prompt_mode == PromptMode.SINGLE
        assert card.prompt == "a lighthouse at dawn" + SCENE_JOINER + "waves crash below"
        assert card.state == CardState.DONE
        assert card.audio_status == "Smart voice-over ready (Puck)"
        assert mock_client.calls_to("generate_videos")[0]["prompt"].startswith(card.prompt)

    @pytest.mark.asyncio
    async def test_single_rejects_empty(self, studio, session):
        with pytest.raises(ValidationError):
            await studio.manual_single(["", "   "])
        assert session.status == "Please describe at least one scene."
        assert session.board.is_empty

    @pytest.mark.asyncio
    async def test_batch_publishes_all_cards(self, studio, session):
        cards = await studio.manual_batch("city at night\n\nforest at noon\n\n\ndesert at dusk")
        await studio.wait()

        assert session.prompt_mode == PromptMode.BATCH
        assert [c.label for c in cards] == ["Video 1 of 3", "Video 2 of 3", "Video 3 of 3"]
        assert [c.prompt for c in cards] == ["city at night", "forest at noon", "desert at dusk"]
        assert session.board.cards == list(reversed(cards))
        assert all(c.state == CardState.DONE for c in cards)
        assert session.status == "Successfully generated 3 videos!"
        assert len(session.assets.list(AssetKind.VIDEO)) == 3

    @pytest.mark.asyncio
    async def test_batch_with_errors(self, studio, session, mock_client):
        mock_client.empty = True
        cards = await studio.manual_batch("one\n\ntwo")
        assert all(c.state == CardState.FAILED for c in cards)
        assert session.status == "Batch processing completed with some errors"

    @pytest.mark.asyncio
    async def test_batch_rejects_blank(self, studio, session):
        with pytest.raises(ValidationError):
            await studio.manual_batch("\n\n   \n")
        assert session.status == "Please enter at least one prompt."


# ============================================================
# Image and voice modes
# ============================================================

class TestImageAndVoice:

    @pytest.mark.asyncio
    async def test_images(self, studio, session):
        cards = await studio.images("red fox in snow", number_of_images=2)
        assert session.mode == StudioMode.IMAGE
        assert len(cards) == 2

    @pytest.mark.asyncio
    async def test_images_rejects_blank_prompt(self, studio, session):
        with pytest.raises(ValidationError):
            await studio.images("  ")
        assert session.status == "Please enter a prompt for the image."

    @pytest.mark.asyncio
    async def test_images_without_key(self, keyless_studio):
        with pytest.raises(ConfigurationError):
            await keyless_studio.images("red fox")
        assert keyless_studio.session.status == (
            "Error: API Key is not configured. Please contact the administrator."
        )

    @pytest.mark.asyncio
    async def test_voice(self, studio, session):
        card = await studio.voice("Halo semua, selamat datang", voice="Puck", temperature=1.5)
        assert session.mode == StudioMode.VOICE
        assert card.status == "Voice: Puck | Temperature: 1.5"

    @pytest.mark.asyncio
    async def test_voice_rejects_blank(self, studio, session):
        with pytest.raises(ValidationError):
            await studio.voice("")
        assert session.status == "Please enter a script to generate voice."


# ============================================================
# Film modes
# ============================================================

class TestFilm:

    @pytest.mark.asyncio
    async def test_storyboard(self, studio, session):
        cards = await studio.film("A lighthouse keeper's last night", 4)
        assert session.mode == StudioMode.FILM
        assert len(cards) == 4
        assert session.status == "Storyboard created successfully! 4 scenes ready for video generation."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic,count", [("", 3), ("topic", 0), ("topic", None)])
    async def test_storyboard_validation(self, studio, session, topic, count):
        with pytest.raises(ValidationError):
            await studio.film(topic, count)
        assert session.status == "Please enter a valid film topic and number of scenes."

    @pytest.mark.asyncio
    async def test_storyboard_failure_sets_status(self, studio, session, mock_client):
        mock_client.queue_text("a title only")
        with pytest.raises(ScriptParseError):
            await studio.film("topic", 3)
        assert session.status.startswith("Storyboard generation failed: Failed to parse scenes")

    @pytest.mark.asyncio
    async def test_storyboard_without_key(self, keyless_studio):
        with pytest.raises(ConfigurationError):
            await keyless_studio.film("topic", 3)
        assert keyless_studio.session.status.startswith("Storyboard generation failed: API Key")

    @pytest.mark.asyncio
    async def test_filmmaker(self, studio, session, reference_image):
        result = await studio.filmmaker(reference_image, "A day at the harbor", 3)
        assert session.mode == StudioMode.FILMMAKER
        assert result.succeeded
        assert session.status == "Film created successfully! 3 scenes with consistent character."

    @pytest.mark.asyncio
    async def test_filmmaker_needs_reference(self, studio, session):
        with pytest.raises(ValidationError):
            await studio.filmmaker(None, "story", 3)
        assert session.status == "Please upload an image reference for the character."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [2, 31])
    async def test_filmmaker_scene_bounds(self, studio, session, reference_image, count):
        with pytest.raises(ValidationError):
            await studio.filmmaker(reference_image, "story", count)
        assert session.status == "Please enter a valid story and scene count (3-30)."

    @pytest.mark.asyncio
    async def test_filmmaker_partial_failure_status(self, studio, session, reference_image):
        original = studio.filmmaker_agent.render_scene

        async def flaky(scene_prompt, card, index, reference):
            if index == 0:
                raise RuntimeError("boom")
            return await original(scene_prompt, card, index, reference)

        studio.filmmaker_agent.render_scene = flaky
        await studio.filmmaker(reference_image, "story", 3)
        assert session.status == "Film created with 1 failed scenes. 2 scenes with consistent character."

    @pytest.mark.asyncio
    async def test_filmmaker_scene_to_video_uses_image(self, studio, session, mock_client, reference_image):
        result = await studio.filmmaker(reference_image, "A day at the harbor", 3)
        card = result.cards[0]

        asset = await studio.generate_scene_video(card.card_id)
        await studio.wait()

        assert asset is not None
        assert [a.kind for a in card.assets] == [AssetKind.IMAGE, AssetKind.VIDEO]
        request = mock_client.calls_to("generate_videos")[-1]
        assert request["has_image"]
        assert card.aspect_ratio == "16:9"
        assert card.audio_status is None

    @pytest.mark.asyncio
    async def test_storyboard_scene_to_video(self, studio, session, mock_client):
        cards = await studio.film("topic", 3, aspect_ratio="9:16")

        await studio.generate_scene_video(cards[1].card_id)
        await studio.wait()

        assert cards[1].state == CardState.DONE
        assert cards[1].aspect_ratio == "9:16"
        assert not mock_client.calls_to("generate_videos")[-1]["has_image"]
        assert cards[1].audio_status == "Smart voice-over ready (Puck)"
        assert cards[0].state == CardState.PENDING

    @pytest.mark.asyncio
    async def test_unknown_scene_card(self, studio):
        with pytest.raises(ValidationError):
            await studio.generate_scene_video(987654321)


# ============================================================
# Ad mode and utilities
# ============================================================

@pytest.mark.asyncio
async def test_ad(studio, session, reference_image):
    card = await studio.ad(reference_image, language="id-ID", voice="Kore")
    assert session.mode == StudioMode.AD
    assert card.audio_status == "Audio synced with video"


@pytest.mark.asyncio
async def test_ad_requires_image(studio, session):
    with pytest.raises(ValidationError):
        await studio.ad(None)
    assert session.status == "Please upload a product image first."


@pytest.mark.asyncio
async def test_delete_card(studio, session):
    cards = await studio.images("red fox", number_of_images=2)
    assert studio.delete_card(cards[0].card_id)
    assert not studio.delete_card(cards[0].card_id)
    assert len(session.assets) == 1


@pytest.mark.asyncio
async def test_enhance(studio, mock_client):
    mock_client.queue_text("A cinematic red fox")
    assert await studio.enhance("red fox") == "A cinematic red fox"


@pytest.mark.asyncio
async def test_probe_ip(studio):
    with patch("workflows.orchestrator.get_public_ip", new_callable=AsyncMock, return_value="203.0.113.9"):
        assert await studio.probe_ip() == "203.0.113.9"
