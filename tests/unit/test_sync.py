"""Tests for the audio/video sync binder"""

import pytest

from core.sync import MediaElement, MediaEvent, SyncBinder, bind_narration


@pytest.fixture
def pair():
    video = MediaElement("video.mp4", duration=8.0, loop=True)
    narration = MediaElement("voice.wav", duration=4.8)
    return video, narration


def test_play_seeks_narration_then_plays(pair):
    video, narration = pair
    bind_narration(video, narration)

    video.current_time = 2.5
    video.play()

    assert narration.current_time == 2.5
    assert not narration.paused


def test_narration_is_positioned_before_it_starts(pair):
    video, narration = pair
    bind_narration(video, narration)
    events = []
    narration.add_listener(MediaEvent.SEEKED, lambda el: events.append(("seeked", el.current_time, el.paused)))
    narration.add_listener(MediaEvent.PLAY, lambda el: events.append(("play", el.current_time, el.paused)))

    video.current_time = 2.5
    video.play()

    assert [e[0] for e in events] == ["seeked", "play"]
    # still paused at the seek, so playback starts from the synced position
    assert events[0] == ("seeked", 2.5, True)
    assert events[1] == ("play", 2.5, False)


def test_pause_follows(pair):
    video, narration = pair
    bind_narration(video, narration)
    video.play()
    video.pause()
    assert narration.paused


def test_seek_follows_and_clamps_to_narration_length(pair):
    video, narration = pair
    bind_narration(video, narration)

    video.seek(3.0)
    assert narration.current_time == 3.0

    video.seek(7.0)
    assert narration.current_time == 4.8


def test_ended_rewinds_narration(pair):
    video, narration = pair
    bind_narration(video, narration)
    video.seek(4.0)
    video.play()

    video.end()

    assert narration.paused
    assert narration.current_time == 0


def test_standard_volume(pair):
    video, narration = pair
    bind_narration(video, narration)
    assert narration.volume == 0.8


def test_unbind_removes_every_listener(pair):
    video, narration = pair
    binder = bind_narration(video, narration)
    assert all(video.listener_count(event) == 1 for event in MediaEvent)

    binder.unbind()

    assert not binder.is_bound
    assert all(video.listener_count(event) == 0 for event in MediaEvent)
    video.play()
    assert narration.paused


def test_bind_is_idempotent(pair):
    video, narration = pair
    binder = SyncBinder(video, narration).bind()
    binder.bind()
    assert video.listener_count(MediaEvent.PLAY) == 1


def test_no_drift_correction_while_playing(pair):
    video, narration = pair
    bind_narration(video, narration)
    video.play()
    # position changes without an event are not mirrored
    video.current_time = 5.0
    assert narration.current_time == 0.0
