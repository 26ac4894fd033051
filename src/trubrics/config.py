"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any

from .exceptions import ConfigurationError


DEFAULT_HOST = "https://app.trubrics.com/api/ingestion"

# Flush limits (seconds / events)
MIN_FLUSH_INTERVAL = 1.0
DEFAULT_FLUSH_INTERVAL = 10.0
MAX_FLUSH_BATCH_SIZE = 100
DEFAULT_FLUSH_BATCH_SIZE = 20

# How often the scheduler checks the flush triggers
DEFAULT_TICK_INTERVAL = 1.0

# Fixed delay before the single retry of a failed batch
DEFAULT_RETRY_DELAY = 5.0

LLM_EVENT_SHAPES = ("llm_event", "split")


@dataclass(frozen=True)
class TrubricsConfig:
    """
    Configuration for the Trubrics client.

    Can be set via:
    - Constructor arguments
    - Environment variables (TRUBRICS_API_KEY, TRUBRICS_HOST)
    - A YAML or dict config (see from_yaml / from_dict)

    Immutable once built; invalid values raise ConfigurationError.
    """
    # Project API key, sent as the x-api-key header
    api_key: str = field(
        default_factory=lambda: os.environ.get("TRUBRICS_API_KEY", "")
    )

    # Ingestion service base URL
    host: str = field(
        default_factory=lambda: os.environ.get("TRUBRICS_HOST", DEFAULT_HOST)
    )

    # Seconds between time-triggered flushes
    flush_interval: float = DEFAULT_FLUSH_INTERVAL

    # Events per flush; also the queue length that triggers a flush
    flush_batch_size: int = DEFAULT_FLUSH_BATCH_SIZE

    # Gates informational logging only
    is_verbose: bool = False

    # "llm_event" sends one LLM record, "split" sends Prompt + Generation events
    llm_event_shape: str = "llm_event"

    # HTTP request timeout (seconds)
    timeout: float = 30.0

    retry_delay: float = DEFAULT_RETRY_DELAY
    tick_interval: float = DEFAULT_TICK_INTERVAL

    def __post_init__(self):
        if isinstance(self.flush_batch_size, bool) or not isinstance(self.flush_batch_size, int):
            raise ConfigurationError(
                f"Flush batch size must be an integer, got {self.flush_batch_size!r}"
            )
        for name in ("flush_interval", "tick_interval", "retry_delay", "timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}")
        if not self.api_key:
            raise ConfigurationError("No API key provided.")
        if not self.host:
            raise ConfigurationError("Host cannot be empty")
        if self.flush_interval < MIN_FLUSH_INTERVAL:
            raise ConfigurationError(
                f"Flush interval cannot be less than {int(MIN_FLUSH_INTERVAL * 1000)} ms"
            )
        if self.flush_batch_size > MAX_FLUSH_BATCH_SIZE:
            raise ConfigurationError(
                f"Flush batch size cannot be more than {MAX_FLUSH_BATCH_SIZE} events"
            )
        if self.flush_batch_size < 1:
            raise ConfigurationError("Flush batch size must be at least 1 event")
        if self.llm_event_shape not in LLM_EVENT_SHAPES:
            raise ConfigurationError(
                f"Unknown LLM event shape {self.llm_event_shape!r}, "
                f"expected one of {LLM_EVENT_SHAPES}"
            )
        if self.tick_interval <= 0:
            raise ConfigurationError("Tick interval must be positive")
        if self.retry_delay < 0:
            raise ConfigurationError("Retry delay cannot be negative")

    @property
    def flush_interval_ms(self) -> int:
        return int(self.flush_interval * 1000)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrubricsConfig:
        """Create config from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {sorted(unknown)}")
        # Unset or null entries fall back to the field defaults
        return cls(**{k: v for k, v in data.items() if v is not None})

    @classmethod
    def from_yaml(cls, path: str) -> TrubricsConfig:
        """
        Load config from a YAML file.

        Settings may sit at the top level or under a `trubrics:` key.
        """
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if "trubrics" in data and isinstance(data["trubrics"], dict):
            data = data["trubrics"]
        return cls.from_dict(data)
