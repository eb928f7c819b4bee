"""Studio configuration, resolved from keychain secrets and environment"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .providers.base import _mask_secret
from .secrets import get_api_key

DEFAULT_BASE_URL = "https://api.freepik.com"
MISSING_KEY_MESSAGE = "API Key is not configured. Please contact the administrator."

_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = _env_float(name, default)
    return int(value) if value is not None else None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class StudioConfig:
    """Runtime settings for a studio session"""
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 60.0

    # Retry driver
    retry_delay_ms: float = 0.3
    max_attempts: Optional[int] = None
    max_elapsed: Optional[float] = None
    attempt_timeout: Optional[float] = None

    # Batched executor
    batch_size: int = 10
    inter_batch_delay: float = 2.0
    batch_stagger: float = 0.5

    # Result sharing
    sharing_enabled: bool = True
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_thread_id: Optional[str] = None

    output_dir: Path = Path("artifacts/studio")

    @classmethod
    def from_env(cls) -> "StudioConfig":
        """
        Build configuration from keychain/environment.

        Environment variables:
        - FREEPIK_API_KEY: resource API key (keychain first)
        - FREEPIK_BASE_URL: API root (default https://api.freepik.com)
        - STUDIO_RETRY_DELAY_MS, STUDIO_MAX_ATTEMPTS, STUDIO_MAX_ELAPSED,
          STUDIO_ATTEMPT_TIMEOUT: retry policy (default unbounded, 0.3 ms)
        - STUDIO_BATCH_SIZE, STUDIO_BATCH_DELAY: executor settings
        - STUDIO_SHARING: "false" disables result sharing
        - TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID, TELEGRAM_THREAD_ID
        - STUDIO_OUTPUT_DIR: where saved assets go
        """
        return cls(
            api_key=get_api_key("FREEPIK_API_KEY"),
            base_url=os.getenv("FREEPIK_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            request_timeout=_env_float("STUDIO_REQUEST_TIMEOUT", 60.0),
            retry_delay_ms=_env_float("STUDIO_RETRY_DELAY_MS", 0.3),
            max_attempts=_env_int("STUDIO_MAX_ATTEMPTS", None),
            max_elapsed=_env_float("STUDIO_MAX_ELAPSED", None),
            attempt_timeout=_env_float("STUDIO_ATTEMPT_TIMEOUT", None),
            batch_size=_env_int("STUDIO_BATCH_SIZE", 10),
            inter_batch_delay=_env_float("STUDIO_BATCH_DELAY", 2.0),
            sharing_enabled=_env_bool("STUDIO_SHARING", True),
            telegram_bot_token=get_api_key("TELEGRAM_BOT_TOKEN"),
            telegram_chat_id=get_api_key("TELEGRAM_CHAT_ID"),
            telegram_thread_id=get_api_key("TELEGRAM_THREAD_ID"),
            output_dir=Path(os.getenv("STUDIO_OUTPUT_DIR", "artifacts/studio")),
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        return self.api_key

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    def __repr__(self) -> str:
        """Safe repr that masks secrets to prevent accidental exposure in logs."""
        return (
            f"StudioConfig(api_key={_mask_secret(self.api_key)}, "
            f"base_url={self.base_url!r}, retry_delay_ms={self.retry_delay_ms}, "
            f"max_attempts={self.max_attempts}, batch_size={self.batch_size}, "
            f"sharing_enabled={self.sharing_enabled}, "
            f"telegram_bot_token={_mask_secret(self.telegram_bot_token)})"
        )
