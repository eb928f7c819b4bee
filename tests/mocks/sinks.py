"""Fake providers that record what the studio sends them"""

from typing import List, Optional, Tuple

from core.providers.base import (
    AudioGenerationResult,
    AudioProvider,
    BestEffortSink,
    DeliveryResult,
)


class RecordingSink(BestEffortSink):
    """Sink that remembers every delivery; optionally raises to test isolation"""

    def __init__(self, raise_error: bool = False):
        self.deliveries: List[Tuple[str, str, Optional[str], Optional[str], int]] = []
        self.raise_error = raise_error

    @property
    def name(self) -> str:
        return "recording"

    @property
    def enabled(self) -> bool:
        return True

    async def deliver(self, media, kind, prompt, user_name=None, filename=None) -> DeliveryResult:
        if self.raise_error:
            raise RuntimeError("sink exploded")
        self.deliveries.append((kind, prompt, user_name, filename, len(media)))
        return DeliveryResult(delivered=True)

    def kinds(self) -> List[str]:
        return [d[0] for d in self.deliveries]


class SilentNarrator(AudioProvider):
    """Narrator that never produces audio"""

    @property
    def name(self) -> str:
        return "silent"

    async def generate_speech(self, text, voice_id=None, temperature=1.0, **kwargs) -> AudioGenerationResult:
        return AudioGenerationResult(success=False, error_message="silent")

    async def list_voices(self):
        return []


class BrokenNarrator(AudioProvider):
    """Narrator that always raises a non-retryable error"""

    @property
    def name(self) -> str:
        return "broken"

    async def generate_speech(self, text, voice_id=None, temperature=1.0, **kwargs) -> AudioGenerationResult:
        from core.errors import ConfigurationError
        raise ConfigurationError("narrator offline")

    async def list_voices(self):
        return []
