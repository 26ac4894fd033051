"""
Trubrics Python SDK

Tracks product and LLM usage events and delivers them to Trubrics in
batches, in the background.

Usage:
    from trubrics import Trubrics

    async with Trubrics(api_key="...") as trubrics:
        trubrics.track(event="Sign up", user_id="user_1")
        trubrics.track_llm(
            user_id="user_1",
            prompt="What is Trubrics?",
            generation="An LLM analytics platform.",
        )

    # Functional API (default client)
    import trubrics

    trubrics.init(api_key="...")
    trubrics.track(event="Sign up", user_id="user_1")
    await trubrics.flush()
"""

from .client import (
    # Core class
    Trubrics,
    # Default client functions
    init,
    track,
    track_llm,
    flush,
    shutdown,
)
from .config import TrubricsConfig
from .events import EventKind, LLMEvent, QueuedEvent, TrackEvent
from .exceptions import (
    TrubricsError,
    ConfigurationError,
    ValidationError,
    DeliveryError,
)
from .transport import ConsoleTransport, HttpTransport, SendResult, Transport

__version__ = "0.1.0"

__all__ = [
    # Core
    "Trubrics",
    "TrubricsConfig",
    # Default client functions
    "init",
    "track",
    "track_llm",
    "flush",
    "shutdown",
    # Events
    "EventKind",
    "TrackEvent",
    "LLMEvent",
    "QueuedEvent",
    # Transports
    "Transport",
    "SendResult",
    "HttpTransport",
    "ConsoleTransport",
    # Exceptions
    "TrubricsError",
    "ConfigurationError",
    "ValidationError",
    "DeliveryError",
]
