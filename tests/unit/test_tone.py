"""Tests for the offline tone narration provider"""

import struct

import pytest

from core.providers.audio.tone import (
    MAX_DURATION,
    MIN_DURATION,
    SAMPLE_RATE,
    ToneNarrationProvider,
    create_wav_header,
    pcm_to_wav,
    tone_duration,
    tone_frequency,
)


def test_wav_header_layout():
    header = create_wav_header(24000, 1, 16, 1000)
    assert len(header) == 44
    assert header[:4] == b"RIFF"
    assert header[8:16] == b"WAVEfmt "
    riff_size, = struct.unpack("<I", header[4:8])
    sample_rate, byte_rate = struct.unpack("<II", header[24:32])
    data_size, = struct.unpack("<I", header[40:44])
    assert riff_size == 1036
    assert sample_rate == 24000
    assert byte_rate == 48000
    assert data_size == 1000


def test_pcm_to_wav_prepends_header():
    wav = pcm_to_wav(b"\x00\x01" * 10)
    assert len(wav) == 44 + 20
    assert wav.endswith(b"\x00\x01")


def test_duration_is_clamped():
    assert tone_duration("one") == MIN_DURATION
    assert tone_duration("word " * 5) == pytest.approx(3.0)
    assert tone_duration("word " * 100) == MAX_DURATION


def test_frequency_depends_on_voice_and_temperature():
    assert tone_frequency("Kore", 1.0) != tone_frequency("Zephyr", 1.0)
    assert tone_frequency("Kore", 2.0) > tone_frequency("Kore", 1.0)
    assert 120 <= tone_frequency(None, -100.0) <= 880


@pytest.mark.asyncio
async def test_generate_speech():
    provider = ToneNarrationProvider()
    result = await provider.generate_speech("Look at this amazing moment", voice_id="Erinome", temperature=1.3)

    assert result.success
    assert result.duration == pytest.approx(3.0)
    assert result.audio_data[:4] == b"RIFF"
    # 16-bit mono samples after the header
    assert len(result.audio_data) == 44 + int(3.0 * SAMPLE_RATE) * 2
    assert result.provider_metadata["voice"] == "Erinome"


@pytest.mark.asyncio
async def test_generation_is_deterministic():
    provider = ToneNarrationProvider()
    first = await provider.generate_speech("same words here", voice_id="Kore")
    second = await provider.generate_speech("same  words   here", voice_id="Kore")
    assert first.audio_data == second.audio_data


@pytest.mark.asyncio
async def test_empty_text_fails():
    result = await ToneNarrationProvider().generate_speech("   ")
    assert not result.success


@pytest.mark.asyncio
async def test_voice_catalogue():
    voices = await ToneNarrationProvider().list_voices()
    assert "Kore" in voices and "Erinome" in voices
