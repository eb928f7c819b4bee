"""
Studio session state.

One StudioSession owns everything a front-end would otherwise keep in
module globals: the active mode, the asset registry, the result board, the
scene counter, who is generating and whether results may be shared. It also
owns the background tasks spawned by generation jobs and the narration
bindings attached to finished cards, so teardown can release all of them.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, Set

from .config import MISSING_KEY_MESSAGE, StudioConfig
from .errors import ConfigurationError
from .models.assets import AssetRegistry, GeneratedAsset
from .models.results import ResultBoard, ResultCard
from .providers.audio import ToneNarrationProvider
from .providers.base import AudioProvider, BestEffortSink, DeliveryResult, GenerationClient, NullSink
from .retry import RetryPolicy
from .sync import SyncBinder

logger = logging.getLogger(__name__)


class StudioMode(str, Enum):
    MANUAL = "manual"
    FILM = "film"
    IMAGE = "image"
    VOICE = "voice"
    AD = "iklan"
    FILMMAKER = "filmmaker"


class PromptMode(str, Enum):
    SINGLE = "single"
    BATCH = "batch"


class StudioSession:
    """Mutable state shared by every generation job of one user session"""

    def __init__(
        self,
        client: GenerationClient,
        config: Optional[StudioConfig] = None,
        sink: Optional[BestEffortSink] = None,
        narrator: Optional[AudioProvider] = None,
        user_name: str = "",
    ):
        self.client = client
        self.config = config or StudioConfig()
        self.sink = sink or NullSink()
        self.narrator = narrator or ToneNarrationProvider()
        self.retry_policy = RetryPolicy.from_config(self.config)

        self.user_name = user_name
        self.sharing_enabled = self.config.sharing_enabled
        self.mode = StudioMode.MANUAL
        self.prompt_mode = PromptMode.SINGLE
        self.status = ""
        self.scene_counter = 1

        self.assets = AssetRegistry()
        self.board = ResultBoard()
        self.bindings: Dict[int, SyncBinder] = {}
        self._tasks: Set[asyncio.Task] = set()

    def init(self) -> "StudioSession":
        """Reset to a fresh session."""
        self.mode = StudioMode.MANUAL
        self.prompt_mode = PromptMode.SINGLE
        self.status = ""
        self.scene_counter = 1
        self.assets.clear()
        self.board.clear()
        self.bindings.clear()
        return self

    async def teardown(self):
        """Cancel outstanding work and release bindings."""
        await self.cancel_all()
        for binder in self.bindings.values():
            binder.unbind()
        self.bindings.clear()

    async def __aenter__(self):
        return self.init()

    async def __aexit__(self, exc_type, exc, tb):
        await self.teardown()
        await self.client.close()

    # Credentials

    def require_credentials(self):
        if not self.client.has_credentials:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

    # Background tasks

    def spawn(self, coro: Awaitable) -> asyncio.Task:
        """Run ``coro`` as a tracked background task."""
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending_tasks(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    async def drain(self):
        """Wait until every spawned task (including ones they spawn) settles."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def cancel_all(self):
        tasks = [t for t in self._tasks if not t.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # Results

    def register(self, card: ResultCard, asset: GeneratedAsset) -> GeneratedAsset:
        self.assets.add(asset)
        card.attach(asset)
        return asset

    def bind(self, card: ResultCard, binder: SyncBinder):
        previous = self.bindings.pop(card.card_id, None)
        if previous:
            previous.unbind()
        self.bindings[card.card_id] = binder

    def delete_card(self, card_id: int) -> bool:
        """
        Remove a card and every asset it produced.

        Deleting an unknown or already-deleted card is a no-op returning False.
        """
        card = self.board.remove(card_id)
        if card is None:
            return False
        for filename in card.filenames:
            self.assets.remove(filename)
        binder = self.bindings.pop(card_id, None)
        if binder:
            binder.unbind()
        return True

    def on_retry(self, card: ResultCard, message: str) -> Callable[[int, float], None]:
        """Retry callback writing ``message (attempt)`` into a card's status."""
        def callback(attempt: int, delay_ms: float):
            card.set_retry(message, attempt)
        return callback

    # Sharing

    async def share(self, media: bytes, kind: str, prompt: str, filename: Optional[str] = None) -> DeliveryResult:
        """Send finished media to the sink; never raises."""
        if not self.sharing_enabled:
            logger.info(f"Sharing disabled by user preference. {kind.title()} not shared.")
            return DeliveryResult(delivered=False, skipped=True)
        try:
            return await self.sink.deliver(media, kind, prompt, user_name=self.user_name, filename=filename)
        except Exception as e:
            logger.warning(f"Sink {self.sink.name} raised during delivery: {e}")
            return DeliveryResult(delivered=False, error_message=str(e))
