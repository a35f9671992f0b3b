"""Execution layer errors - ExecutionError, RequestTimeoutError, HTTPStatusError."""

import asyncio
from typing import Optional

import aiohttp

TIMEOUT_SENTINEL = "timeout"


class ExecutionError(Exception):
    """
    Structured failure returned to callers of the execution layer.

    Attributes:
        message: Human-readable description
        integration_id: Integration the call was made against
        status_code: Transport status code, when the failure carried one
        is_retryable: Whether the caller may retry (always False once
            retries have been exhausted inside the layer)
        original_error: Underlying exception, for diagnostics
    """

    def __init__(
        self,
        message: str,
        integration_id: str,
        status_code: Optional[int] = None,
        is_retryable: bool = False,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.integration_id = integration_id
        self.status_code = status_code
        self.is_retryable = is_retryable
        self.original_error = original_error
        self.__cause__ = original_error

    def __repr__(self) -> str:
        return (
            f"ExecutionError(integration_id={self.integration_id!r}, "
            f"message={self.message!r}, status_code={self.status_code!r})"
        )


class RequestTimeoutError(Exception):
    """Raised when an attempt loses the race against its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_ms = int(timeout_seconds * 1000)
        super().__init__(f"Request timeout after {self.timeout_ms}ms")


class HTTPStatusError(Exception):
    """Raised for a non-2xx HTTP response."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}")


def is_timeout_error(error: Optional[BaseException]) -> bool:
    """Return True when ``error`` represents a timed-out attempt."""
    if error is None:
        return False
    if isinstance(error, (RequestTimeoutError, asyncio.TimeoutError)):
        return True
    return TIMEOUT_SENTINEL in str(error).lower()


def status_code_of(error: Optional[BaseException]) -> Optional[int]:
    """Extract a transport status code from ``error``, if it carries one."""
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status
    status_code = getattr(error, "status_code", None)
    return status_code if isinstance(status_code, int) else None
