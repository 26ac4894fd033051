"""Trubrics event types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Union


class EventKind(str, Enum):
    """Variant tag of a queued event."""
    EVENT = "event"
    LLM_EVENT = "llm_event"

    @property
    def endpoint(self) -> str:
        """Ingestion endpoint suffix for this kind of event."""
        return INGESTION_ENDPOINTS[self]


INGESTION_ENDPOINTS: dict[EventKind, str] = {
    EventKind.EVENT: "publish_events",
    EventKind.LLM_EVENT: "publish_llm_events",
}

# Event names used when an LLM interaction is sent as two standard events
PROMPT_EVENT = "Prompt"
GENERATION_EVENT = "Generation"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class TrackEvent:
    """A standard event: something a user did in the host application."""
    event: str
    user_id: str
    timestamp: datetime = field(default_factory=_now)
    properties: dict[str, Any] | None = None

    kind = EventKind.EVENT

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ingestion wire record."""
        record: dict[str, Any] = {
            "event": self.event,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.properties is not None:
            record["properties"] = self.properties
        return record


@dataclass(frozen=True, slots=True)
class LLMEvent:
    """
    A single LLM interaction: the user's prompt and the model's generation.

    Latency is the generation time in milliseconds.
    """
    user_id: str
    prompt: str
    generation: str
    timestamp: datetime = field(default_factory=_now)
    assistant_id: str | None = None
    latency: int | None = None
    thread_id: str | None = None
    properties: dict[str, Any] | None = None

    kind = EventKind.LLM_EVENT

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ingestion wire record, omitting unset fields."""
        record: dict[str, Any] = {
            "user_id": self.user_id,
            "prompt": self.prompt,
            "generation": self.generation,
            "timestamp": self.timestamp.isoformat(),
        }
        for key in ("assistant_id", "latency", "thread_id", "properties"):
            value = getattr(self, key)
            if value is not None:
                record[key] = value
        return record

    def split(self) -> tuple[TrackEvent, TrackEvent]:
        """
        Expand into a Prompt and a Generation standard event.

        The Generation event is stamped at the prompt time plus latency,
        so both events order correctly downstream.
        """
        base = dict(self.properties or {})

        prompt_properties = {**base, "$text": self.prompt}
        if self.thread_id is not None:
            prompt_properties["$thread_id"] = self.thread_id

        generation_properties = {
            **base,
            "$text": self.generation,
            "$prompt": self.prompt,
        }
        if self.assistant_id is not None:
            generation_properties["$assistant_id"] = self.assistant_id
        if self.thread_id is not None:
            generation_properties["$thread_id"] = self.thread_id
        if self.latency is not None:
            generation_properties["latency(ms)"] = self.latency

        generation_time = self.timestamp
        if self.latency:
            generation_time = self.timestamp + timedelta(milliseconds=self.latency)

        return (
            TrackEvent(
                event=PROMPT_EVENT,
                user_id=self.user_id,
                timestamp=self.timestamp,
                properties=prompt_properties,
            ),
            TrackEvent(
                event=GENERATION_EVENT,
                user_id=self.user_id,
                timestamp=generation_time,
                properties=generation_properties,
            ),
        )


Event = Union[TrackEvent, LLMEvent]


@dataclass(frozen=True, slots=True)
class QueuedEvent:
    """An event waiting in the queue, tagged with its kind."""
    kind: EventKind
    event: Event

    @classmethod
    def wrap(cls, event: Event) -> QueuedEvent:
        return cls(kind=event.kind, event=event)

    def to_dict(self) -> dict[str, Any]:
        return self.event.to_dict()
