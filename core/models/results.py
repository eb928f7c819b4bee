"""Result cards: the per-task slots that generation jobs report into.

A card is published synchronously before its task does any asynchronous
work and is then mutated in place, so a card's position on the board is
fixed by start order regardless of completion order.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .assets import GeneratedAsset

if TYPE_CHECKING:
    from core.sync import MediaElement


class CardState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


_card_ids = itertools.count(1)


@dataclass
class ResultCard:
    """One slot on the result board"""
    kind: str                                   # "video", "image", "voice", "scene"
    prompt: str
    label: Optional[str] = None                 # e.g. "Video 2 of 5", "Scene 3 of 12"
    status: str = "Please Wait..."
    state: CardState = CardState.PENDING
    loading: bool = True
    assets: List[GeneratedAsset] = field(default_factory=list)
    audio_status: Optional[str] = None
    error: Optional[str] = None
    media: Optional["MediaElement"] = None
    narration: Optional["MediaElement"] = None
    aspect_ratio: str = "16:9"
    card_id: int = field(default_factory=lambda: next(_card_ids))

    def set_status(self, message: str, loading: bool = True):
        if loading:
            self.state = CardState.RUNNING
            self.error = None
        self.status = message
        self.loading = loading

    def set_retry(self, message: str, attempt: int):
        self.set_status(f"{message} ({attempt})")

    def complete(self, message: str = ""):
        self.state = CardState.DONE
        self.status = message
        self.loading = False

    def fail(self, message: str):
        self.state = CardState.FAILED
        self.status = message
        self.error = message
        self.loading = False

    def attach(self, asset: GeneratedAsset):
        self.assets.append(asset)

    @property
    def filenames(self) -> List[str]:
        return [a.filename for a in self.assets]


class ResultBoard:
    """Ordered collection of cards; newest first, like a feed"""

    def __init__(self):
        self._cards: List[ResultCard] = []

    def publish(self, card: ResultCard) -> ResultCard:
        self._cards.insert(0, card)
        return card

    def append(self, card: ResultCard) -> ResultCard:
        """Add at the bottom; storyboards read top to bottom."""
        self._cards.append(card)
        return card

    def remove(self, card_id: int) -> Optional[ResultCard]:
        for index, card in enumerate(self._cards):
            if card.card_id == card_id:
                return self._cards.pop(index)
        return None

    def get(self, card_id: int) -> Optional[ResultCard]:
        for card in self._cards:
            if card.card_id == card_id:
                return card
        return None

    @property
    def cards(self) -> List[ResultCard]:
        return list(self._cards)

    @property
    def is_empty(self) -> bool:
        return not self._cards

    def clear(self):
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)
