"""
Batched parallel executor.

Runs N jobs in fixed-size batches: every job in a batch runs concurrently,
the batch settles completely (failures included) before an inter-batch
pause, and only then does the next batch start. This keeps request bursts
against the resource API bounded for long multi-scene jobs.

Each job gets a placeholder slot published synchronously, before any of the
batch's tasks are scheduled, so slot order always matches start order.
"""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

DEFAULT_BATCH_SIZE = 10
DEFAULT_INTER_BATCH_DELAY = 2.0  # seconds


@dataclass
class TaskOutcome(Generic[S]):
    """Settled state of one job"""
    index: int
    slot: S
    result: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Summary of a full executor run"""
    outcomes: List[TaskOutcome] = field(default_factory=list)
    batch_sizes: List[int] = field(default_factory=list)
    cancelled: bool = False

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def all_succeeded(self) -> bool:
        return not self.cancelled and self.failed == 0


class BatchedExecutor:
    """
    Run jobs in batches of ``batch_size`` with ``inter_batch_delay`` seconds
    between batches.

    Usage:
        executor = BatchedExecutor(batch_size=10, inter_batch_delay=2.0)
        report = await executor.run(scenes, publish=make_card, work=render_scene)
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE, inter_batch_delay: float = DEFAULT_INTER_BATCH_DELAY):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self._in_flight: List[asyncio.Task] = []
        self._cancelled = False

    def plan(self, total: int) -> List[int]:
        """Batch sizes for ``total`` jobs, e.g. 23 with size 10 -> [10, 10, 3]."""
        batches = math.ceil(total / self.batch_size) if total > 0 else 0
        return [
            min(self.batch_size, total - i * self.batch_size)
            for i in range(batches)
        ]

    async def run(
        self,
        items: Sequence[T],
        publish: Callable[[T, int], S],
        work: Callable[[T, S, int], Awaitable[Any]],
        on_batch_start: Optional[Callable[[int, int, int], None]] = None,
    ) -> BatchReport:
        """
        Execute ``work`` for every item.

        Args:
            items: Job inputs, in start order
            publish: Synchronously creates the placeholder slot for an item
            work: Coroutine doing the job; receives (item, slot, index).
                Exceptions are captured per job and never abort siblings.
            on_batch_start: Called with (batch_number, first, last) before
                each batch publishes its slots; numbers are 1-based

        Returns:
            BatchReport with one outcome per started job
        """
        self._cancelled = False
        report = BatchReport()
        total = len(items)
        sizes = self.plan(total)

        for batch_number, size in enumerate(sizes):
            if self._cancelled:
                report.cancelled = True
                break

            start = batch_number * self.batch_size
            batch_items = items[start:start + size]
            logger.info(f"Starting batch {batch_number + 1}/{len(sizes)} ({size} jobs)")
            if on_batch_start:
                on_batch_start(batch_number + 1, start + 1, start + size)

            slots = [publish(item, start + offset) for offset, item in enumerate(batch_items)]
            self._in_flight = [
                asyncio.create_task(work(item, slot, start + offset))
                for offset, (item, slot) in enumerate(zip(batch_items, slots))
            ]

            try:
                results = await asyncio.gather(*self._in_flight, return_exceptions=True)
            except asyncio.CancelledError:
                self._cancel_in_flight()
                raise
            finally:
                self._in_flight = []

            for offset, (slot, result) in enumerate(zip(slots, results)):
                outcome = TaskOutcome(index=start + offset, slot=slot)
                if isinstance(result, BaseException):
                    outcome.error = result
                    if isinstance(result, asyncio.CancelledError):
                        report.cancelled = True
                    else:
                        logger.warning(f"Job {start + offset + 1} failed: {result}")
                else:
                    outcome.result = result
                report.outcomes.append(outcome)
            report.batch_sizes.append(size)

            is_last = batch_number == len(sizes) - 1
            if not is_last and not self._cancelled:
                await asyncio.sleep(self.inter_batch_delay)

        if self._cancelled:
            report.cancelled = True
        return report

    def cancel(self):
        """Stop scheduling further batches and cancel the running one."""
        self._cancelled = True
        self._cancel_in_flight()

    def _cancel_in_flight(self):
        for task in self._in_flight:
            if not task.done():
                task.cancel()
