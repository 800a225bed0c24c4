"""Exceptions raised by the mock API layer."""
from __future__ import annotations


class MockApiError(Exception):
    """Base class for errors raised while answering an intercepted call."""


class PayloadDecodeError(MockApiError, ValueError):
    """Raised when an intercepted request body is not valid JSON."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"invalid JSON payload: {reason}")
        self.raw = raw
        self.reason = reason


class TokenFormatError(MockApiError, ValueError):
    """Raised when an order token does not have the header.claims.signature shape."""
