"""Base transport interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class SendResult:
    """Outcome of one send attempt."""
    ok: bool
    status_text: str | None = None


class Transport(ABC):
    """
    Abstract base class for event transports.

    A transport delivers one batch of wire records to one ingestion
    endpoint. It reports failure through SendResult rather than raising.
    """

    @abstractmethod
    async def send(self, records: list[dict[str, Any]], endpoint: str) -> SendResult:
        """Send a batch of records to the given endpoint suffix."""
        ...

    async def start(self) -> None:
        """Initialize the transport (called on client start)."""
        pass

    async def stop(self) -> None:
        """Release transport resources (called on client shutdown)."""
        pass
