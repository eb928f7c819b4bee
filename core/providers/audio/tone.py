"""
Tone Narration Provider

Offline stand-in for a TTS voice: renders a sine tone whose length follows
the word count of the text and whose pitch is derived from the voice name
and temperature. Output is 24 kHz, 16-bit, mono WAV, the same format raw
TTS PCM is wrapped into by pcm_to_wav.

Deterministic for a given (text, voice, temperature), which keeps narration
cards reproducible in tests.
"""

import struct
from typing import List, Optional

import numpy as np

from ..base import AudioGenerationResult, AudioProvider, AudioProviderConfig

SAMPLE_RATE = 24000
NUM_CHANNELS = 1
BITS_PER_SAMPLE = 16
AMPLITUDE = 0.3

SECONDS_PER_WORD = 0.6
MIN_DURATION = 2.0
MAX_DURATION = 10.0
MIN_FREQUENCY = 120
MAX_FREQUENCY = 880

# Prebuilt voice names accepted by the analysis prompts
VOICES = [
    "Zephyr", "Puck", "Autonoe", "Laomedeia",
    "Kore", "Orus", "Alnilam",
    "Aoede", "Algieba", "Erinome", "Iapetus", "Despina",
    "Umbriel", "Callirrhoe", "Zubenelgenubi",
    "Charon", "Rasalgethi", "Sadaltager",
    "Enceladus", "Vindemiatrix", "Sulafat",
    "Fenrir", "Leda", "Schedar", "Achird", "Gacrux", "Sadachbia", "Algenib", "Pulcherrima",
]


def create_wav_header(sample_rate: int, num_channels: int, bits_per_sample: int, data_size: int) -> bytes:
    """Canonical 44-byte PCM RIFF header."""
    byte_rate = sample_rate * num_channels * bits_per_sample // 8
    block_align = num_channels * bits_per_sample // 8
    return struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF", 36 + data_size, b"WAVE",
        b"fmt ", 16, 1, num_channels, sample_rate, byte_rate, block_align, bits_per_sample,
        b"data", data_size,
    )


def pcm_to_wav(pcm: bytes, sample_rate: int = SAMPLE_RATE) -> bytes:
    """Wrap raw 16-bit mono PCM in a WAV container."""
    return create_wav_header(sample_rate, NUM_CHANNELS, BITS_PER_SAMPLE, len(pcm)) + pcm


def create_tone_wav(duration_seconds: float, frequency: float, sample_rate: int = SAMPLE_RATE) -> bytes:
    total_samples = max(1, int(duration_seconds * sample_rate))
    t = np.arange(total_samples)
    wave = np.clip(np.sin(2 * np.pi * frequency * t / sample_rate) * AMPLITUDE, -1.0, 1.0)
    samples = np.round(wave * 0x7FFF).astype("<i2")
    return pcm_to_wav(samples.tobytes(), sample_rate)


def word_count(text: str) -> int:
    return len(text.split())


def tone_duration(text: str) -> float:
    return max(MIN_DURATION, min(MAX_DURATION, word_count(text) * SECONDS_PER_WORD))


def tone_frequency(voice_name: Optional[str], temperature: float) -> int:
    seed = ord(voice_name[0]) if voice_name else 0
    base = 220 + (seed % 220)
    return max(MIN_FREQUENCY, min(MAX_FREQUENCY, base + round((temperature - 1) * 40)))


class ToneNarrationProvider(AudioProvider):
    """Synthesizes placeholder narration tracks without any network call"""

    DEFAULT_VOICE = "FreepikVoice"

    def __init__(self, config: Optional[AudioProviderConfig] = None):
        super().__init__(config)

    @property
    def name(self) -> str:
        return "tone"

    async def generate_speech(
        self,
        text: str,
        voice_id: Optional[str] = None,
        temperature: float = 1.0,
        **kwargs
    ) -> AudioGenerationResult:
        normalized = " ".join(text.split())
        if not normalized:
            return AudioGenerationResult(success=False, error_message="No text to narrate")

        voice = voice_id or self.DEFAULT_VOICE
        duration = tone_duration(normalized)
        frequency = tone_frequency(voice, temperature)

        return AudioGenerationResult(
            success=True,
            audio_data=create_tone_wav(duration, frequency),
            duration=duration,
            format="wav",
            sample_rate=SAMPLE_RATE,
            channels=NUM_CHANNELS,
            provider_metadata={
                "voice": voice,
                "frequency": frequency,
                "words": word_count(normalized),
                "provider": self.name,
            },
        )

    async def list_voices(self) -> List[str]:
        return list(VOICES)
