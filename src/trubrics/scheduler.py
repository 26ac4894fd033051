"""Periodic flush scheduler with a single-flight guard."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from .batcher import EventBatcher
from .config import DEFAULT_TICK_INTERVAL
from .queue import EventQueue


logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    FLUSHING = "flushing"


@dataclass
class FlushScheduler:
    """
    Decides when to flush and makes sure only one flush runs at a time.

    Every tick, a flush starts if the queue holds at least a full batch or
    the flush interval has elapsed since the last flush. A flush takes at
    most flush_batch_size events from the head of the queue and removes
    them only once the batcher is done with them (delivered or dropped).
    """
    queue: EventQueue
    batcher: EventBatcher

    flush_interval: float
    flush_batch_size: int
    tick_interval: float = DEFAULT_TICK_INTERVAL
    is_verbose: bool = False

    # Monotonic clock in seconds; replaced in tests
    clock: Callable[[], float] = time.monotonic

    state: SchedulerState = field(default=SchedulerState.IDLE, init=False)
    last_flush_time: float = field(default=0.0, init=False)
    _inflight: asyncio.Future | None = field(default=None, init=False)
    _task: asyncio.Task | None = field(default=None, init=False)
    _running: bool = field(default=False, init=False)

    def __post_init__(self):
        self.last_flush_time = self.clock()

    @property
    def is_flushing(self) -> bool:
        return self.state is SchedulerState.FLUSHING

    def should_flush(self) -> bool:
        """Size or time trigger."""
        if len(self.queue) >= self.flush_batch_size:
            return True
        return self.clock() - self.last_flush_time >= self.flush_interval

    async def tick(self) -> bool:
        """
        Evaluate the triggers once.

        Returns True if this tick ran a flush.
        """
        if self.is_flushing or not self.should_flush():
            return False
        return await self.flush() is not None

    async def flush(self) -> int | None:
        """
        Run one flush cycle.

        Returns the number of events taken off the queue, or None when
        skipped because another flush is in flight.
        """
        if self.is_flushing:
            return None

        self.state = SchedulerState.FLUSHING
        self._inflight = asyncio.get_running_loop().create_future()
        try:
            batch = self.queue.peek(self.flush_batch_size)
            if batch:
                await self.batcher.deliver(batch)
                self.queue.remove(len(batch))
            removed = len(batch)
        finally:
            self.last_flush_time = self.clock()
            self.state = SchedulerState.IDLE
            self._inflight.set_result(None)
            self._inflight = None
        return removed

    async def wait_idle(self) -> None:
        """Wait for the in-flight flush, if any, to complete."""
        if self._inflight is not None:
            await asyncio.shield(self._inflight)

    async def drain(self) -> None:
        """Flush batch after batch until the queue is empty."""
        while len(self.queue):
            await self.wait_idle()
            if await self.flush() == 0:
                break

    async def run(self) -> None:
        """
        Background loop that ticks every tick_interval.

        Ticks never overlap: each tick awaits its flush before sleeping.
        """
        if self.is_verbose:
            logger.info(
                f"Flush scheduler started (interval={self.flush_interval}s, "
                f"batch_size={self.flush_batch_size})"
            )

        while self._running:
            try:
                await asyncio.sleep(self.tick_interval)
                if not self._running:
                    break
                await self.tick()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Flush scheduler error: {e}")

    def start(self) -> None:
        """Start the tick loop as a task on the running event loop."""
        if self._task is None or self._task.done():
            self._running = True
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """
        Stop the tick loop.

        A sleeping loop is cancelled; a loop in the middle of a flush
        (retry delay included) is allowed to finish it first.
        """
        self._running = False
        if self._task is None:
            return

        if not self.is_flushing:
            self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
