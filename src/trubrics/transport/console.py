"""Console transport for development/debugging."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from .base import SendResult, Transport


@dataclass
class ConsoleTransport(Transport):
    """
    Transport that prints batches instead of sending them.

    Useful for development: every batch is reported as delivered.
    """
    # Output destination
    stream: str = "stdout"  # stdout | stderr

    # Prefix for each line
    prefix: str = "[TRUBRICS] "

    async def send(self, records: list[dict[str, Any]], endpoint: str) -> SendResult:
        out = sys.stdout if self.stream == "stdout" else sys.stderr

        for record in records:
            print(f"{self.prefix}{endpoint} {json.dumps(record, default=str)}", file=out)

        return SendResult(ok=True)
