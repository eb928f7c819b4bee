"""Provider interfaces for external services (resource search, narration, sharing)"""

import importlib

from .base import (
    AudioGenerationResult,
    AudioProvider,
    AudioProviderConfig,
    BestEffortSink,
    DeliveryResult,
    GenerationClient,
    GenerationProviderConfig,
    NullSink,
)
from .freepik import FreepikClient
from .mock import MockFreepikClient
from .audio import ToneNarrationProvider
from .notify import TelegramSink

__all__ = [
    # Base interfaces
    "GenerationClient",
    "GenerationProviderConfig",
    "AudioProvider",
    "AudioProviderConfig",
    "AudioGenerationResult",
    "BestEffortSink",
    "DeliveryResult",
    "NullSink",
    # Implementations
    "FreepikClient",
    "MockFreepikClient",
    "ToneNarrationProvider",
    "TelegramSink",
    # Registry
    "PROVIDER_REGISTRY",
    "get_all_providers",
]


# Provider Registry for CLI introspection
PROVIDER_REGISTRY = {
    "freepik": {
        "name": "freepik",
        "category": "generation",
        "class": "FreepikClient",
        "module": "core.providers.freepik",
        "api_key_env": "FREEPIK_API_KEY",
        "features": ["resource search", "inline previews", "video search"],
    },
    "mock": {
        "name": "mock",
        "category": "generation",
        "class": "MockFreepikClient",
        "module": "core.providers.mock",
        "api_key_env": None,
        "features": ["offline", "scripted failures"],
    },
    "tone": {
        "name": "tone",
        "category": "audio",
        "class": "ToneNarrationProvider",
        "module": "core.providers.audio.tone",
        "api_key_env": None,
        "features": ["24 kHz mono WAV", "deterministic"],
    },
    "telegram": {
        "name": "telegram",
        "category": "sharing",
        "class": "TelegramSink",
        "module": "core.providers.notify.telegram",
        "api_key_env": "TELEGRAM_BOT_TOKEN",
        "features": ["sendPhoto", "sendVideo", "forum threads"],
    },
}


def get_all_providers():
    """
    Get all providers with their metadata and an ``available`` flag.

    Returns:
        list: Provider metadata dicts
    """
    from core.secrets import get_api_key

    providers = []
    for info in PROVIDER_REGISTRY.values():
        entry = dict(info)
        module = importlib.import_module(info["module"])
        entry["implemented"] = hasattr(module, info["class"])
        key_name = info["api_key_env"]
        entry["available"] = entry["implemented"] and (key_name is None or bool(get_api_key(key_name)))
        providers.append(entry)
    return providers

