"""
Telegram Result Sharing

Posts finished images and videos to a Telegram chat (optionally a forum
thread) via the Bot API. Delivery is fire-and-forget: one attempt, failures
logged, never raised to the generation task that produced the media.

API Docs: https://core.telegram.org/bots/api#sendphoto
"""

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import aiohttp

from ..base import BestEffortSink, DeliveryResult, _mask_secret

logger = logging.getLogger(__name__)

API_ROOT = "https://api.telegram.org"
CAPTION_PROMPT_LIMIT = 200
CAPTION_TIMEZONE = "Asia/Jakarta"

HEADERS = {
    "image": "🖼️ Image Generated by Freepik Studio",
    "video": "🎬 Video Generated by Freepik Studio",
}


def truncate_prompt(prompt: str, limit: int = CAPTION_PROMPT_LIMIT) -> str:
    if len(prompt) > limit:
        return prompt[:limit] + "..."
    return prompt


def build_caption(kind: str, prompt: str, user_name: Optional[str] = None, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(ZoneInfo(CAPTION_TIMEZONE))
    return (
        f"{HEADERS.get(kind, HEADERS['image'])}\n\n"
        f"📝 Prompt: \"{truncate_prompt(prompt)}\"\n\n"
        f"👤 User: {user_name or 'Anonymous'}\n"
        f"⏰ {now.strftime('%d/%m/%Y, %H.%M.%S')}"
    )


class TelegramSink(BestEffortSink):
    """Shares media to a Telegram chat through sendPhoto / sendVideo"""

    METHODS = {
        "image": ("sendPhoto", "photo", "image/jpeg", "jpg"),
        "video": ("sendVideo", "video", "video/mp4", "mp4"),
    }

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        thread_id: Optional[str] = None,
        sharing_enabled: bool = True,
        timeout: float = 60.0,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.thread_id = thread_id
        self.sharing_enabled = sharing_enabled
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "TelegramSink":
        return cls(
            bot_token=config.telegram_bot_token,
            chat_id=config.telegram_chat_id,
            thread_id=config.telegram_thread_id,
            sharing_enabled=config.sharing_enabled,
            timeout=config.request_timeout,
        )

    @property
    def name(self) -> str:
        return "telegram"

    @property
    def enabled(self) -> bool:
        return self.sharing_enabled and bool(self.bot_token and self.chat_id)

    async def deliver(
        self,
        media: bytes,
        kind: str,
        prompt: str,
        user_name: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> DeliveryResult:
        if not self.sharing_enabled:
            logger.info(f"Sharing disabled by user preference. {kind.title()} not sent to Telegram.")
            return DeliveryResult(delivered=False, skipped=True)
        if not self.enabled:
            logger.debug("Telegram sink not configured, skipping delivery")
            return DeliveryResult(delivered=False, skipped=True)
        if kind not in self.METHODS:
            return DeliveryResult(delivered=False, error_message=f"Unsupported media kind: {kind}")

        method, field_name, content_type, extension = self.METHODS[kind]
        timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")

        form = aiohttp.FormData()
        form.add_field("chat_id", str(self.chat_id))
        if self.thread_id:
            form.add_field("message_thread_id", str(self.thread_id))
        form.add_field(
            field_name,
            media,
            filename=filename or f"studio_{kind}_{timestamp}.{extension}",
            content_type=content_type,
        )
        form.add_field("caption", build_caption(kind, prompt, user_name))
        form.add_field("parse_mode", "HTML")

        url = f"{API_ROOT}/bot{self.bot_token}/{method}"
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, data=form) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f"Failed to send {kind} to chat {self.chat_id}: {error_text}")
                        return DeliveryResult(
                            delivered=False,
                            error_message=f"Telegram API error ({response.status}): {error_text}",
                        )
                    result = await response.json(content_type=None)
        except Exception as e:
            logger.warning(f"Error sending {kind} to Telegram: {e}")
            return DeliveryResult(delivered=False, error_message=str(e))

        logger.info(f"{kind.title()} sent to chat {self.chat_id} (thread {self.thread_id})")
        return DeliveryResult(delivered=True, provider_metadata={"response": result})

    def __repr__(self) -> str:
        return (
            f"TelegramSink(bot_token={_mask_secret(self.bot_token)}, chat_id={self.chat_id!r}, "
            f"thread_id={self.thread_id!r}, sharing_enabled={self.sharing_enabled})"
        )
