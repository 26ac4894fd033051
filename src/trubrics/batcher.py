"""Batch delivery with a single delayed retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable

from .config import DEFAULT_RETRY_DELAY
from .events import EventKind, QueuedEvent
from .exceptions import DeliveryError
from .transport.base import SendResult, Transport


logger = logging.getLogger(__name__)


def partition(events: Iterable[QueuedEvent]) -> dict[EventKind, list[QueuedEvent]]:
    """
    Split a drained slice by kind.

    Relative order within each kind is preserved; kinds with no events
    are left out.
    """
    partitions: dict[EventKind, list[QueuedEvent]] = {kind: [] for kind in EventKind}
    for item in events:
        partitions[item.kind].append(item)
    return {kind: batch for kind, batch in partitions.items() if batch}


@dataclass
class EventBatcher:
    """
    Delivers drained events to the transport, one request per kind.

    A kind whose send fails is retried exactly once after a fixed delay.
    If the retry fails too the batch for that kind is dropped and logged,
    never re-queued: bounded data loss over retry storms.
    """
    transport: Transport
    retry_delay: float = DEFAULT_RETRY_DELAY
    is_verbose: bool = False

    # Awaited before each retry; replaced in tests to skip the real delay
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    last_error: DeliveryError | None = field(default=None, init=False)
    _stats: dict = field(default_factory=dict, init=False)

    def __post_init__(self):
        self._stats = {
            "batches_sent": 0,
            "events_sent": 0,
            "retries": 0,
            "batches_dropped": 0,
            "events_dropped": 0,
        }

    async def deliver(self, events: list[QueuedEvent]) -> bool:
        """
        Deliver a drained slice.

        Every kind gets its first attempt before any retry is made.

        Returns:
            True if every kind was delivered, False if any was dropped
        """
        batches = partition(events)

        delivered = {}
        for kind, batch in batches.items():
            delivered[kind] = (await self._post(kind, batch)).ok

        for kind, batch in batches.items():
            if not delivered[kind]:
                delivered[kind] = await self._retry(kind, batch)

        return all(delivered.values())

    async def _retry(self, kind: EventKind, batch: list[QueuedEvent]) -> bool:
        await self.sleep(self.retry_delay)
        self._stats["retries"] += 1
        logger.warning(f"Retrying to post {len(batch)} {kind.value}s")

        result = await self._post(kind, batch)
        if result.ok:
            return True

        error = DeliveryError(kind.value, len(batch), result.status_text)
        self.last_error = error
        self._stats["batches_dropped"] += 1
        self._stats["events_dropped"] += len(batch)
        logger.error(f"Dropping batch after retry: {error}")
        return False

    async def _post(self, kind: EventKind, batch: list[QueuedEvent]) -> SendResult:
        if self.is_verbose:
            logger.info(f"Posting {len(batch)} {kind.value}s")

        try:
            result = await self.transport.send(
                [item.to_dict() for item in batch],
                kind.endpoint,
            )
        except Exception as e:
            logger.error(f"Trubrics was unable to post {len(batch)} {kind.value}s: {e}")
            result = SendResult(ok=False, status_text=str(e))

        if result.ok:
            self._stats["batches_sent"] += 1
            self._stats["events_sent"] += len(batch)
        return result

    @property
    def stats(self) -> dict:
        """Get delivery statistics."""
        return dict(self._stats)
