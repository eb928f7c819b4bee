"""Tests for the character-consistent filmmaker agent"""

import pytest

from agents.filmmaker import FilmmakerAgent, lock_character, parse_scenes
from agents.prompts import CHARACTER_LOCK_SUFFIX
from core.batching import BatchedExecutor
from core.errors import ScriptParseError
from core.models.results import CardState
from tests.mocks.fixtures import make_filmmaker_text


# ============================================================
# Parsing
# ============================================================

def test_parse_scenes_strips_prefix():
    scenes = parse_scenes(make_filmmaker_text(3), 3)
    assert scenes[0] == "Wide shot - the hero walks further along the pier, step 1"
    assert len(scenes) == 3


def test_parse_scenes_caps_count():
    assert len(parse_scenes(make_filmmaker_text(5), 2)) == 2


def test_parse_scenes_without_markers():
    with pytest.raises(ScriptParseError, match="Failed to generate scenes"):
        parse_scenes("Once upon a time", 3)


def test_lock_character():
    assert lock_character("Close-up") == "Close-up" + CHARACTER_LOCK_SUFFIX


# ============================================================
# Full run
# ============================================================

@pytest.mark.asyncio
async def test_create_renders_every_scene(session, mock_client, reference_image):
    agent = FilmmakerAgent(session)

    result = await agent.create(reference_image, "A day at the harbor", 4)

    assert result.succeeded
    assert len(result.scenes) == 4
    assert [c.label for c in result.cards] == [f"Scene {i} of 4" for i in range(1, 5)]
    assert all(c.state == CardState.DONE for c in result.cards)
    # published newest first
    assert session.board.cards == list(reversed(result.cards))
    filenames = [c.assets[0].filename for c in result.cards]
    assert filenames[0].startswith("filmmaker-scene-1-") and filenames[0].endswith(".jpeg")
    assert len(session.assets) == 4

    image_calls = [c for c in mock_client.calls_to("generate_content") if c["model"] == "freepik-image"]
    assert len(image_calls) == 4
    assert all(CHARACTER_LOCK_SUFFIX.strip() in c["prompt"] for c in image_calls)


@pytest.mark.asyncio
async def test_batches_report_progress(session, mock_client, reference_image):
    agent = FilmmakerAgent(session, executor=BatchedExecutor(batch_size=2, inter_batch_delay=0.0))
    statuses = []
    original = agent.executor.run

    async def spy(items, publish, work, on_batch_start=None):
        def recording(number, first, last):
            on_batch_start(number, first, last)
            statuses.append(session.status)
        return await original(items, publish=publish, work=work, on_batch_start=recording)

    agent.executor.run = spy
    result = await agent.create(reference_image, "story", 5)

    assert result.report.batch_sizes == [2, 2, 1]
    assert statuses == [
        "Generating batch 1 (scenes 1-2)...",
        "Generating batch 2 (scenes 3-4)...",
        "Generating batch 3 (scenes 5-5)...",
    ]


@pytest.mark.asyncio
async def test_scene_failure_is_isolated(session, mock_client, reference_image):
    agent = FilmmakerAgent(session)
    original = agent.render_scene

    async def flaky(scene_prompt, card, index, reference):
        if index == 1:
            card.fail("Error: boom")
            raise RuntimeError("boom")
        return await original(scene_prompt, card, index, reference)

    agent.render_scene = flaky
    result = await agent.create(reference_image, "story", 3)

    assert not result.succeeded
    assert result.report.failed == 1
    assert [c.state for c in result.cards] == [CardState.DONE, CardState.FAILED, CardState.DONE]
    assert result.cards[1].status == "Error: boom"


@pytest.mark.asyncio
async def test_character_analysis_sends_reference(session, mock_client, reference_image):
    mock_client.queue_text("A tall woman with a red scarf")
    character = await FilmmakerAgent(session).analyze_character(reference_image)
    assert character == "A tall woman with a red scarf"
    assert session.status == "Analyzing character from image"


@pytest.mark.asyncio
async def test_scene_prompt_includes_character(session, mock_client):
    await FilmmakerAgent(session).write_scenes("A tall woman with a red scarf", "harbor story", 3)
    prompt = mock_client.calls_to("generate_content")[0]["prompt"]
    assert "A tall woman with a red scarf" in prompt
    assert "NUMBER OF SCENES: 3" in prompt
