"""Tests for event types and wire records."""

from datetime import datetime, timedelta, timezone

from trubrics.events import (
    GENERATION_EVENT,
    PROMPT_EVENT,
    EventKind,
    LLMEvent,
    QueuedEvent,
    TrackEvent,
)


TS = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class TestEventKind:
    def test_endpoints(self):
        assert EventKind.EVENT.endpoint == "publish_events"
        assert EventKind.LLM_EVENT.endpoint == "publish_llm_events"


class TestTrackEvent:
    def test_timestamp_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        event = TrackEvent(event="Sign up", user_id="user_1")
        after = datetime.now(timezone.utc)
        assert before <= event.timestamp <= after

    def test_to_dict(self):
        event = TrackEvent(
            event="Sign up",
            user_id="user_1",
            timestamp=TS,
            properties={"plan": "pro"},
        )
        assert event.to_dict() == {
            "event": "Sign up",
            "user_id": "user_1",
            "timestamp": "2024-01-15T12:00:00+00:00",
            "properties": {"plan": "pro"},
        }

    def test_to_dict_without_properties(self):
        event = TrackEvent(event="Sign up", user_id="user_1", timestamp=TS)
        assert "properties" not in event.to_dict()


class TestLLMEvent:
    def test_to_dict_omits_unset(self):
        event = LLMEvent(user_id="u", prompt="p", generation="g", timestamp=TS)
        assert event.to_dict() == {
            "user_id": "u",
            "prompt": "p",
            "generation": "g",
            "timestamp": "2024-01-15T12:00:00+00:00",
        }

    def test_to_dict_full(self):
        event = LLMEvent(
            user_id="u",
            prompt="p",
            generation="g",
            timestamp=TS,
            assistant_id="gpt-4o",
            latency=1500,
            thread_id="t1",
            properties={"$support": True},
        )
        d = event.to_dict()
        assert d["assistant_id"] == "gpt-4o"
        assert d["latency"] == 1500
        assert d["thread_id"] == "t1"
        assert d["properties"] == {"$support": True}

    def test_split(self):
        event = LLMEvent(
            user_id="u",
            prompt="What is Trubrics?",
            generation="An analytics platform.",
            timestamp=TS,
            assistant_id="gpt-4o",
            latency=2000,
            thread_id="t1",
            properties={"country": "FR"},
        )
        prompt, generation = event.split()

        assert prompt.event == PROMPT_EVENT
        assert prompt.user_id == "u"
        assert prompt.timestamp == TS
        assert prompt.properties == {
            "country": "FR",
            "$text": "What is Trubrics?",
            "$thread_id": "t1",
        }

        assert generation.event == GENERATION_EVENT
        assert generation.timestamp == TS + timedelta(milliseconds=2000)
        assert generation.properties["$text"] == "An analytics platform."
        assert generation.properties["$prompt"] == "What is Trubrics?"
        assert generation.properties["$assistant_id"] == "gpt-4o"
        assert generation.properties["latency(ms)"] == 2000
        assert generation.properties["country"] == "FR"

    def test_split_does_not_share_properties(self):
        base = {"country": "FR"}
        event = LLMEvent(user_id="u", prompt="p", generation="g", properties=base)
        prompt, generation = event.split()
        assert base == {"country": "FR"}
        assert prompt.properties is not generation.properties


class TestQueuedEvent:
    def test_wrap_tags_kind(self):
        assert QueuedEvent.wrap(TrackEvent(event="e", user_id="u")).kind == EventKind.EVENT
        llm = LLMEvent(user_id="u", prompt="p", generation="g")
        assert QueuedEvent.wrap(llm).kind == EventKind.LLM_EVENT
