"""Exceptions raised by the Trubrics SDK."""

from __future__ import annotations


class TrubricsError(Exception):
    """Base exception for Trubrics SDK errors."""
    pass


class ConfigurationError(TrubricsError):
    """Invalid client configuration (raised at construction)."""
    pass


class ValidationError(TrubricsError):
    """An event failed validation and was not queued."""
    pass


class DeliveryError(TrubricsError):
    """A batch could not be delivered, even after its retry."""

    def __init__(self, kind: str, count: int, reason: str | None = None):
        message = f"Unable to deliver {count} {kind}(s)"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.kind = kind
        self.count = count
        self.reason = reason
