"""Transports - how batches reach the ingestion service."""

from .base import SendResult, Transport
from .console import ConsoleTransport
from .http import HttpTransport

__all__ = [
    "SendResult",
    "Transport",
    "ConsoleTransport",
    "HttpTransport",
]
