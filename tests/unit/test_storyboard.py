"""Tests for storyboard generation"""

import pytest

from agents.storyboard import StoryboardAgent, parse_storyboard
from core.errors import ScriptParseError
from core.models.results import CardState
from tests.mocks.fixtures import make_storyboard_text


class TestParseStoryboard:

    def test_scene_blocks(self):
        scenes = parse_storyboard(make_storyboard_text(4), 4)
        assert len(scenes) == 4
        assert scenes[0].startswith("Scene 1: [8-second HD 1080p video] - Beat 1")
        assert "**SETTING**" in scenes[0]
        assert "Scene 2" not in scenes[0]

    def test_capped_at_requested_count(self):
        assert len(parse_storyboard(make_storyboard_text(6), 3)) == 3

    def test_case_insensitive_markers(self):
        assert parse_storyboard("SCENE 1: a\nSCENE 2: b", 5) == ["SCENE 1: a", "SCENE 2: b"]

    def test_paragraph_fallback(self):
        long_paragraph = "The camera glides over rooftops while rain starts to fall. " * 3
        short_paragraph = "Too short to count as a scene."
        text = f"{long_paragraph}\n\n{short_paragraph}\n\n{long_paragraph}"
        scenes = parse_storyboard(text, 5)
        assert len(scenes) == 2

    def test_long_paragraph_without_hints_is_ignored(self):
        with pytest.raises(ScriptParseError):
            parse_storyboard("Nothing here resembles a shot list at all. " * 5, 3)


@pytest.mark.asyncio
async def test_create_appends_scene_cards_in_order(session, mock_client):
    cards = await StoryboardAgent(session).create("A lighthouse keeper's last night", 5, "9:16")

    assert len(cards) == 5
    assert session.board.cards == cards
    for number, card in enumerate(cards, start=1):
        assert card.kind == "scene"
        assert card.label == f"Scene {number}"
        assert card.status == "Duration: 8 seconds"
        assert card.state == CardState.PENDING
        assert not card.loading
        assert card.aspect_ratio == "9:16"
    assert session.status == ""

    sent = mock_client.calls_to("generate_content")[0]["prompt"]
    assert "A lighthouse keeper's last night" in sent
    assert "Number of Scenes Required: 5" in sent


@pytest.mark.asyncio
async def test_retry_updates_session_status(session, mock_client):
    mock_client.fail_next(1)
    statuses = []

    agent = StoryboardAgent(session)
    original = agent._generate_text

    async def spy(contents, on_retry=None, **kwargs):
        def recording_retry(attempt, delay_ms):
            on_retry(attempt, delay_ms)
            statuses.append(session.status)
        return await original(contents, on_retry=recording_retry, **kwargs)

    agent._generate_text = spy
    await agent.create("topic", 3)

    assert statuses == ["Creating your story with AI Director... (1)"]


@pytest.mark.asyncio
async def test_empty_content(session, mock_client):
    mock_client.queue_text("")
    with pytest.raises(ScriptParseError, match="No content generated"):
        await StoryboardAgent(session).create("topic", 3)


@pytest.mark.asyncio
async def test_unparseable_content(session, mock_client):
    mock_client.queue_text("just a title")
    with pytest.raises(ScriptParseError, match="Failed to parse scenes"):
        await StoryboardAgent(session).create("topic", 3)
    assert session.board.is_empty
