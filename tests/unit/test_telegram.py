"""Tests for the Telegram result sink"""

from datetime import datetime
from unittest.mock import patch

import pytest

from core.providers.notify.telegram import TelegramSink, build_caption, truncate_prompt
from tests.mocks.fixtures import make_config


# ============================================================
# Captions
# ============================================================

def test_caption_for_image():
    caption = build_caption("image", "a red fox", "Dewi", now=datetime(2025, 3, 1, 14, 5, 9))
    assert caption.startswith("🖼️ Image Generated by Freepik Studio")
    assert '📝 Prompt: "a red fox"' in caption
    assert "👤 User: Dewi" in caption
    assert caption.endswith("⏰ 01/03/2025, 14.05.09")


def test_caption_for_video_without_user():
    caption = build_caption("video", "waves", None, now=datetime(2025, 1, 1))
    assert caption.startswith("🎬 Video Generated by Freepik Studio")
    assert "👤 User: Anonymous" in caption


def test_long_prompt_is_truncated():
    assert truncate_prompt("x" * 250) == "x" * 200 + "..."
    assert truncate_prompt("x" * 200) == "x" * 200


# ============================================================
# Delivery
# ============================================================

@pytest.mark.asyncio
async def test_unconfigured_sink_skips():
    sink = TelegramSink(bot_token=None, chat_id=None)
    assert not sink.enabled
    result = await sink.deliver(b"img", "image", "prompt")
    assert result.skipped
    assert not result.delivered


@pytest.mark.asyncio
async def test_opt_out_skips_even_when_configured():
    sink = TelegramSink(bot_token="123:abc", chat_id="-100", sharing_enabled=False)
    result = await sink.deliver(b"img", "image", "prompt")
    assert result.skipped


@pytest.mark.asyncio
async def test_unsupported_kind():
    sink = TelegramSink(bot_token="123:abc", chat_id="-100")
    result = await sink.deliver(b"wav", "audio", "prompt")
    assert not result.delivered
    assert "Unsupported" in result.error_message


@pytest.mark.asyncio
async def test_transport_failure_never_raises():
    sink = TelegramSink(bot_token="123:abc", chat_id="-100")
    with patch("core.providers.notify.telegram.aiohttp.ClientSession", side_effect=OSError("network down")):
        result = await sink.deliver(b"img", "image", "prompt", user_name="Dewi")
    assert not result.delivered
    assert "network down" in result.error_message


def test_from_config_and_repr_masks_token():
    config = make_config(
        telegram_bot_token="123456:ABCDEFGHIJK",
        telegram_chat_id="-100200",
        telegram_thread_id="7",
    )
    sink = TelegramSink.from_config(config)
    assert sink.enabled
    assert sink.thread_id == "7"
    assert "ABCDEFGHIJK" not in repr(sink)
