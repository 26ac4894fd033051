"""HTTP transport posting batches to the Trubrics ingestion API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .base import SendResult, Transport


logger = logging.getLogger(__name__)


@dataclass
class HttpTransport(Transport):
    """
    Transport that POSTs each batch as a JSON array.

    Request: POST {host}/{endpoint}
    Headers: Content-Type: application/json, x-api-key: {api_key}

    Any 2xx response counts as delivered. Connection errors, timeouts and
    non-2xx responses are reported as a failed SendResult.
    """
    host: str
    api_key: str
    timeout: float = 30.0

    # Optional pre-built client (tests pass one with a MockTransport)
    client: httpx.AsyncClient | None = None

    _owns_client: bool = field(default=False, init=False)

    async def start(self) -> None:
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True

    async def stop(self) -> None:
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None
            self._owns_client = False

    def url_for(self, endpoint: str) -> str:
        return f"{self.host.rstrip('/')}/{endpoint}"

    async def send(self, records: list[dict[str, Any]], endpoint: str) -> SendResult:
        if self.client is None:
            await self.start()

        url = self.url_for(endpoint)
        try:
            response = await self.client.post(
                url,
                content=json.dumps(records, default=str),
                headers={
                    "Content-Type": "application/json",
                    "x-api-key": self.api_key,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            return SendResult(ok=False, status_text=str(e))

        if not response.is_success:
            logger.error(f"Request failed: {response.status_code} {response.reason_phrase}")
            return SendResult(ok=False, status_text=response.reason_phrase)

        return SendResult(ok=True, status_text=response.reason_phrase)
