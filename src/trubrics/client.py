"""Main client class and convenience functions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from .batcher import EventBatcher
from .config import TrubricsConfig
from .events import LLMEvent, QueuedEvent, TrackEvent
from .exceptions import ConfigurationError, ValidationError
from .queue import EventQueue
from .scheduler import FlushScheduler
from .transport.base import Transport
from .transport.http import HttpTransport
from .validation import validate_properties, validate_request


logger = logging.getLogger(__name__)


class Trubrics:
    """
    Client for tracking events and LLM interactions with Trubrics.

    Events are validated and queued synchronously; delivery happens in the
    background in batches. Tracking never raises: invalid events are logged
    and dropped.

    Usage:
        async with Trubrics(api_key="...") as trubrics:
            trubrics.track(event="Sign up", user_id="user_1")
            trubrics.track_llm(
                user_id="user_1",
                prompt="What is Trubrics?",
                generation="An LLM analytics platform.",
                latency=1200,
            )

        # Or manage the lifecycle yourself
        trubrics = Trubrics(api_key="...", flush_interval=5)
        await trubrics.start()
        ...
        await trubrics.shutdown()
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: TrubricsConfig | None = None,
        transport: Transport | None = None,
        **options: Any,
    ) -> None:
        """
        Args:
            api_key: Project API key (falls back to TRUBRICS_API_KEY)
            config: A complete TrubricsConfig; exclusive with api_key/options
            transport: Where batches go (default: HttpTransport to config.host)
            **options: Any other TrubricsConfig field, e.g. host,
                flush_interval (seconds), flush_batch_size, is_verbose

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if config is not None:
            if api_key is not None or options:
                raise ConfigurationError("Pass either config or individual options, not both")
        else:
            if api_key is not None:
                options["api_key"] = api_key
            try:
                config = TrubricsConfig(**options)
            except TypeError as e:
                raise ConfigurationError(f"Invalid option: {e}") from e

        self.config = config
        self.transport = transport or HttpTransport(
            host=config.host,
            api_key=config.api_key,
            timeout=config.timeout,
        )
        self._queue = EventQueue()
        self._batcher = EventBatcher(
            transport=self.transport,
            retry_delay=config.retry_delay,
            is_verbose=config.is_verbose,
        )
        self._scheduler = FlushScheduler(
            queue=self._queue,
            batcher=self._batcher,
            flush_interval=config.flush_interval,
            flush_batch_size=config.flush_batch_size,
            tick_interval=config.tick_interval,
            is_verbose=config.is_verbose,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Open the transport and start the periodic flush."""
        await self.transport.start()
        self._scheduler.start()

    async def shutdown(self, flush: bool = True) -> None:
        """
        Stop the periodic flush and close the transport.

        Args:
            flush: Deliver everything still queued before closing. When
                False, queued events are discarded.
        """
        await self._scheduler.stop()
        if flush:
            await self._scheduler.drain()
            remaining = len(self._queue)
            if remaining:
                logger.warning(f"{remaining} queued events were not delivered before shutdown")
        else:
            await self._scheduler.wait_idle()
            dropped = self._queue.clear()
            if dropped:
                logger.warning(f"Discarded {dropped} queued events on shutdown")
        await self.transport.stop()

    async def __aenter__(self) -> Trubrics:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    # ------------------------------------------------------------------
    # Tracking
    # ------------------------------------------------------------------

    def track(
        self,
        event: str,
        user_id: str,
        properties: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> bool:
        """
        Track a standard event.

        Returns True if queued, False if dropped as invalid.
        """
        if self.config.is_verbose:
            logger.info("Tracking event...")

        try:
            validate_request(
                strings=[event, user_id],
                timestamps=[timestamp],
                mandatory=[event, user_id],
            )
            validate_properties(properties)
        except ValidationError as e:
            logger.error(f"Trubrics was unable to track the latest event: {e}")
            return False

        kwargs = {"timestamp": timestamp} if timestamp is not None else {}
        self._enqueue(TrackEvent(event=event, user_id=user_id, properties=properties, **kwargs))
        return True

    def track_llm(
        self,
        user_id: str,
        prompt: str,
        generation: str,
        assistant_id: str | None = None,
        properties: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
        latency: int | None = None,
        thread_id: str | None = None,
    ) -> bool:
        """
        Track an LLM interaction (prompt and generation).

        Args:
            latency: Generation time in milliseconds

        Returns True if queued, False if dropped as invalid. With
        llm_event_shape="split" the interaction is queued as a Prompt and
        a Generation event.
        """
        if self.config.is_verbose:
            logger.info("Tracking llm...")

        try:
            validate_request(
                strings=[user_id, prompt, generation, assistant_id, thread_id],
                numbers=[latency],
                timestamps=[timestamp],
                mandatory=[user_id, prompt, generation],
            )
            validate_properties(properties)
        except ValidationError as e:
            logger.error(f"Trubrics was unable to track the latest LLM event: {e}")
            return False

        kwargs = {"timestamp": timestamp} if timestamp is not None else {}
        llm_event = LLMEvent(
            user_id=user_id,
            prompt=prompt,
            generation=generation,
            assistant_id=assistant_id,
            latency=latency,
            thread_id=thread_id,
            properties=properties,
            **kwargs,
        )

        if self.config.llm_event_shape == "split":
            for standard_event in llm_event.split():
                self._enqueue(standard_event)
        else:
            self._enqueue(llm_event)
        return True

    def _enqueue(self, event: TrackEvent | LLMEvent) -> None:
        self._queue.append(QueuedEvent.wrap(event))

    async def flush(self) -> None:
        """
        Deliver up to one batch of queued events now.

        Returns immediately if a flush is already in progress.
        """
        await self._scheduler.flush()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def queue_size(self) -> int:
        """Number of events waiting for delivery."""
        return len(self._queue)

    @property
    def is_flushing(self) -> bool:
        return self._scheduler.is_flushing

    @property
    def last_error(self):
        """The most recent DeliveryError, if a batch was ever dropped."""
        return self._batcher.last_error

    @property
    def stats(self) -> dict:
        return {
            **self._batcher.stats,
            "queue_size": self.queue_size,
            "flushing": self.is_flushing,
        }


# Module-level default client
_default_client: Trubrics | None = None


def init(api_key: str | None = None, **options: Any) -> Trubrics:
    """
    Create the default client used by the module-level functions.

    Replaces any previous default client; shut that one down first if it
    was started.

    Usage:
        import trubrics
        trubrics.init(api_key="...")
        trubrics.track(event="Sign up", user_id="user_1")
        await trubrics.flush()
    """
    global _default_client
    _default_client = Trubrics(api_key, **options)
    return _default_client


def _get_client() -> Trubrics:
    """Get the default client."""
    if _default_client is None:
        raise ConfigurationError("Trubrics is not initialised; call trubrics.init() first")
    return _default_client


def track(
    event: str,
    user_id: str,
    properties: dict[str, Any] | None = None,
    timestamp: datetime | None = None,
) -> bool:
    """Track a standard event with the default client."""
    return _get_client().track(event, user_id, properties=properties, timestamp=timestamp)


def track_llm(user_id: str, prompt: str, generation: str, **kwargs: Any) -> bool:
    """Track an LLM interaction with the default client."""
    return _get_client().track_llm(user_id, prompt, generation, **kwargs)


async def flush() -> None:
    """Flush the default client."""
    await _get_client().flush()


async def shutdown(flush: bool = True) -> None:
    """Shut down and forget the default client."""
    global _default_client
    if _default_client is None:
        return
    client, _default_client = _default_client, None
    await client.shutdown(flush=flush)

