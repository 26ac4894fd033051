#!/usr/bin/env python3
"""Demo script showing event tracking with the Trubrics SDK.

Demonstrates:
1. Standard events
2. LLM events (single record and Prompt/Generation split)
3. Dropped invalid events (logged, never raised)

Events are printed by the console transport instead of being sent.

    python examples/track_demo.py
"""

import asyncio
import logging

from trubrics import ConsoleTransport, Trubrics


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


async def demo_events(shape: str):
    print_section(f"LLM event shape: {shape}")

    async with Trubrics(
        api_key="demo-key",
        transport=ConsoleTransport(),
        llm_event_shape=shape,
        is_verbose=True,
    ) as trubrics:
        trubrics.track(event="Sign up", user_id="user_1", properties={"plan": "pro"})
        trubrics.track_llm(
            user_id="user_1",
            prompt="What is Trubrics?",
            generation="An analytics platform for AI products.",
            assistant_id="gpt-4o",
            latency=1200,
            thread_id="thread_1",
        )

        # Missing user_id: logged and dropped
        trubrics.track(event="Sign up", user_id=None)

        await trubrics.flush()


async def main():
    await demo_events("llm_event")
    await demo_events("split")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())
