"""Audio provider implementations"""

from .tone import ToneNarrationProvider, create_tone_wav, create_wav_header, pcm_to_wav

__all__ = [
    "ToneNarrationProvider",
    "create_tone_wav",
    "create_wav_header",
    "pcm_to_wav",
]
