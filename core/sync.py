"""
Audio/video sync binder.

A generated video and its narration track are separate media elements. The
binder makes the narration follow the video's transport events:

    play   -> seek narration to the video's position, then play
    pause  -> pause narration
    seeked -> seek narration to the video's new position
    ended  -> pause narration and rewind it to 0

Sync is soft: alignment happens only at event time; there is no drift
correction while both are playing.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class MediaEvent(str, Enum):
    PLAY = "play"
    PAUSE = "pause"
    SEEKED = "seeked"
    ENDED = "ended"


Listener = Callable[["MediaElement"], None]


class MediaElement:
    """
    Headless playable element with transport state and event listeners.

    Stands in for a player widget: front-ends drive it with play/pause/seek,
    and the binder listens to the events it emits.
    """

    def __init__(self, src: str, duration: Optional[float] = None, volume: float = 1.0, loop: bool = False):
        self.src = src
        self.duration = duration
        self.volume = volume
        self.loop = loop
        self.current_time = 0.0
        self.paused = True
        self._listeners: Dict[MediaEvent, List[Listener]] = {event: [] for event in MediaEvent}

    def add_listener(self, event: MediaEvent, listener: Listener):
        self._listeners[event].append(listener)

    def remove_listener(self, event: MediaEvent, listener: Listener):
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def listener_count(self, event: MediaEvent) -> int:
        return len(self._listeners[event])

    def emit(self, event: MediaEvent):
        for listener in list(self._listeners[event]):
            listener(self)

    def play(self):
        self.paused = False
        self.emit(MediaEvent.PLAY)

    def pause(self):
        self.paused = True
        self.emit(MediaEvent.PAUSE)

    def seek(self, position: float):
        position = max(0.0, position)
        if self.duration is not None:
            position = min(position, self.duration)
        self.current_time = position
        self.emit(MediaEvent.SEEKED)

    def end(self):
        self.paused = True
        if self.duration is not None:
            self.current_time = self.duration
        self.emit(MediaEvent.ENDED)

    def __repr__(self) -> str:
        return f"MediaElement(src={self.src!r}, t={self.current_time:.2f}, paused={self.paused})"


class SyncBinder:
    """Keeps a narration element following a visual element"""

    def __init__(self, visual: MediaElement, narration: MediaElement):
        self.visual = visual
        self.narration = narration
        self._bound = False
        self._handlers = {
            MediaEvent.PLAY: self._on_play,
            MediaEvent.PAUSE: self._on_pause,
            MediaEvent.SEEKED: self._on_seeked,
            MediaEvent.ENDED: self._on_ended,
        }

    @property
    def is_bound(self) -> bool:
        return self._bound

    def bind(self) -> "SyncBinder":
        if self._bound:
            return self
        for event, handler in self._handlers.items():
            self.visual.add_listener(event, handler)
        self._bound = True
        return self

    def unbind(self):
        if not self._bound:
            return
        for event, handler in self._handlers.items():
            self.visual.remove_listener(event, handler)
        self._bound = False

    def _on_play(self, visual: MediaElement):
        self.narration.seek(visual.current_time)
        self.narration.play()

    def _on_pause(self, visual: MediaElement):
        self.narration.pause()

    def _on_seeked(self, visual: MediaElement):
        self.narration.seek(visual.current_time)

    def _on_ended(self, visual: MediaElement):
        self.narration.pause()
        self.narration.seek(0)


def bind_narration(visual: MediaElement, narration: MediaElement, volume: float = 0.8) -> SyncBinder:
    """Attach narration to a visual at the standard narration volume."""
    narration.volume = volume
    logger.debug(f"Binding narration {narration.src} to {visual.src}")
    return SyncBinder(visual, narration).bind()
