"""Abstract base classes for provider interfaces"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..models.generation import (
    GenerateContentResponse,
    GenerateImagesResponse,
    VideoOperation,
)
from .download import download_bytes


def _mask_secret(value: Optional[str]) -> str:
    """Mask a secret value for safe display in logs/repr."""
    if value is None:
        return "None"
    if len(value) <= 8:
        return "'***'"
    return f"'{value[:4]}...{value[-4:]}'"


@dataclass
class GenerationProviderConfig:
    """Configuration for the generation client"""
    api_key: Optional[str] = None
    base_url: str = "https://api.freepik.com"
    timeout: float = 60.0  # seconds
    extra_params: Dict[str, Any] = None

    def __post_init__(self):
        if self.extra_params is None:
            self.extra_params = {}

    def __repr__(self) -> str:
        """Safe repr that masks API key to prevent accidental exposure in logs."""
        return (
            f"GenerationProviderConfig(api_key={_mask_secret(self.api_key)}, "
            f"base_url={self.base_url!r}, timeout={self.timeout})"
        )


class GenerationClient(ABC):
    """
    Abstract base class for generation backends.

    The surface mirrors a generative-media SDK (generate_content,
    generate_images, generate_videos, get_videos_operation) so orchestration
    code does not care whether results are synthesized or retrieved.
    Implementations: FreepikClient (resource search), MockFreepikClient.
    """

    def __init__(self, config: GenerationProviderConfig):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier"""
        pass

    @abstractmethod
    async def generate_content(self, model: str, contents: Any, **config) -> GenerateContentResponse:
        """
        Generate text (or a single inline image for image-flavored models).

        Args:
            model: Model name; "image"/"video" substrings select behavior
            contents: String, list of parts, or an object with ``parts``

        Returns:
            GenerateContentResponse
        """
        pass

    @abstractmethod
    async def generate_images(
        self,
        model: str,
        prompt: str,
        number_of_images: int = 1,
        **config
    ) -> GenerateImagesResponse:
        """Generate up to ``number_of_images`` images with inline bytes."""
        pass

    @abstractmethod
    async def generate_videos(
        self,
        model: str,
        prompt: str,
        number_of_videos: int = 1,
        image: Optional[Union[bytes, Dict[str, Any]]] = None,
        **config
    ) -> VideoOperation:
        """Start video generation and return its operation."""
        pass

    @abstractmethod
    async def get_videos_operation(self, operation: VideoOperation) -> VideoOperation:
        """Refresh a video operation."""
        pass

    @property
    def has_credentials(self) -> bool:
        return bool(self.config.api_key)

    async def fetch_media(self, url: str) -> Optional[bytes]:
        """Best-effort download of a finished asset; None when unavailable."""
        return await download_bytes(url, timeout=self.config.timeout)

    async def close(self):
        """Release any pooled connections."""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


@dataclass
class AudioProviderConfig:
    """Configuration for audio provider"""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: int = 60  # seconds
    extra_params: Dict[str, Any] = None

    def __post_init__(self):
        if self.extra_params is None:
            self.extra_params = {}

    def __repr__(self) -> str:
        """Safe repr that masks API key to prevent accidental exposure in logs."""
        return (
            f"AudioProviderConfig(api_key={_mask_secret(self.api_key)}, "
            f"base_url={self.base_url!r}, timeout={self.timeout})"
        )


@dataclass
class AudioGenerationResult:
    """Result from audio generation"""
    success: bool
    audio_data: Optional[bytes] = None
    audio_path: Optional[str] = None
    duration: Optional[float] = None
    format: str = "wav"
    sample_rate: int = 24000
    channels: int = 1
    error_message: Optional[str] = None
    provider_metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.provider_metadata is None:
            self.provider_metadata = {}


class AudioProvider(ABC):
    """
    Abstract base class for narration providers.

    Implementations: ToneNarrationProvider (deterministic tone track).
    """

    def __init__(self, config: Optional[AudioProviderConfig] = None):
        self.config = config or AudioProviderConfig()

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier"""
        pass

    @abstractmethod
    async def generate_speech(
        self,
        text: str,
        voice_id: Optional[str] = None,
        temperature: float = 1.0,
        **kwargs
    ) -> AudioGenerationResult:
        """
        Generate narration audio for ``text``.

        Args:
            text: Script to narrate
            voice_id: Voice name (provider-specific)
            temperature: Variation control; providers map it to timbre
            **kwargs: Provider-specific parameters (instructions, language)

        Returns:
            AudioGenerationResult with audio bytes and metadata
        """
        pass

    @abstractmethod
    async def list_voices(self) -> List[str]:
        """List available voice names."""
        pass


@dataclass
class DeliveryResult:
    """Outcome of a best-effort delivery"""
    delivered: bool
    skipped: bool = False
    error_message: Optional[str] = None
    provider_metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.provider_metadata is None:
            self.provider_metadata = {}


class BestEffortSink(ABC):
    """
    Fire-and-forget destination for finished media.

    ``deliver`` never raises: every failure is logged and reported through
    the returned DeliveryResult. Nothing is retried.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Sink name identifier"""
        pass

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def deliver(
        self,
        media: bytes,
        kind: str,
        prompt: str,
        user_name: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> DeliveryResult:
        """
        Send finished media.

        Args:
            media: Media bytes
            kind: "image" or "video"
            prompt: Prompt that produced the media (used in the caption)
            user_name: Who generated it
            filename: Upload filename

        Returns:
            DeliveryResult
        """
        pass


class NullSink(BestEffortSink):
    """Sink that drops everything; used when sharing is off"""

    @property
    def name(self) -> str:
        return "null"

    @property
    def enabled(self) -> bool:
        return False

    async def deliver(self, media, kind, prompt, user_name=None, filename=None) -> DeliveryResult:
        return DeliveryResult(delivered=False, skipped=True)
