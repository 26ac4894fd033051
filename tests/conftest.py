"""Shared test fixtures for the Trubrics SDK tests."""

from __future__ import annotations

import pytest

from trubrics.config import TrubricsConfig
from trubrics.events import LLMEvent, QueuedEvent, TrackEvent
from trubrics.transport.base import SendResult, Transport


# =============================================================================
# Fakes
# =============================================================================

class RecordingTransport(Transport):
    """
    Transport that records every send.

    `outcomes` is consumed one per call (True = delivered, False = failed,
    an Exception instance = raised); once exhausted every call succeeds.
    """

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.calls: list[tuple[str, list[dict]]] = []
        self.started = False
        self.stopped = False

    async def send(self, records, endpoint):
        self.calls.append((endpoint, records))
        outcome = self.outcomes.pop(0) if self.outcomes else True
        if isinstance(outcome, Exception):
            raise outcome
        if outcome:
            return SendResult(ok=True, status_text="OK")
        return SendResult(ok=False, status_text="Internal Server Error")

    async def start(self):
        self.started = True

    async def stop(self):
        self.stopped = True

    def endpoints(self) -> list[str]:
        return [endpoint for endpoint, _ in self.calls]


class RecordingSleep:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> TrubricsConfig:
    return TrubricsConfig(api_key="test-key", host="https://ingest.test/api/ingestion")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of the tests."""
    monkeypatch.delenv("TRUBRICS_API_KEY", raising=False)
    monkeypatch.delenv("TRUBRICS_HOST", raising=False)


def make_event(n: int = 0, user_id: str = "user_1") -> QueuedEvent:
    return QueuedEvent.wrap(TrackEvent(event=f"event_{n}", user_id=user_id))


def make_llm_event(n: int = 0, user_id: str = "user_1") -> QueuedEvent:
    return QueuedEvent.wrap(
        LLMEvent(user_id=user_id, prompt=f"prompt_{n}", generation=f"generation_{n}")
    )
