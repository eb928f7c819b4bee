"""Tests for prompt enhancement"""

import pytest

from agents.prompt_enhancer import PromptEnhancerAgent, enhance_prompt
from agents.prompts import build_enhancement_prompt
from core.providers.base import GenerationProviderConfig
from core.providers.mock import MockFreepikClient


@pytest.mark.asyncio
async def test_returns_transformed_text(mock_client):
    mock_client.queue_text("  A lone surfer carves a glowing wave at golden hour, drone shot.  ")
    enhanced = await enhance_prompt(mock_client, "surfer at sunset")
    assert enhanced == "A lone surfer carves a glowing wave at golden hour, drone shot."


@pytest.mark.asyncio
async def test_sends_the_enhancement_template(mock_client):
    await enhance_prompt(mock_client, "surfer at sunset")
    sent = mock_client.calls_to("generate_content")[0]["prompt"]
    assert sent == build_enhancement_prompt("surfer at sunset").strip()
    assert "surfer at sunset" in sent


@pytest.mark.asyncio
async def test_failure_falls_back_without_retry(mock_client):
    mock_client.fail_next(1)
    assert await enhance_prompt(mock_client, "surfer at sunset") == "surfer at sunset"
    assert len(mock_client.calls_to("generate_content")) == 1


@pytest.mark.asyncio
async def test_empty_response_falls_back(mock_client):
    mock_client.queue_text("   ")
    assert await enhance_prompt(mock_client, "surfer at sunset") == "surfer at sunset"


@pytest.mark.asyncio
async def test_no_credentials_skips_the_call():
    client = MockFreepikClient(GenerationProviderConfig(api_key=None))
    assert await enhance_prompt(client, "surfer at sunset") == "surfer at sunset"
    assert client.calls == []


@pytest.mark.asyncio
async def test_agent_leaves_blank_prompt_alone(session, mock_client):
    agent = PromptEnhancerAgent(session)
    assert await agent.run("   ") == "   "
    assert mock_client.calls == []
