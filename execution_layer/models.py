"""Execution layer models - options, call log entries, results and statistics."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, Literal, Mapping, Optional, TypeVar, Union
import uuid

from core.domain.enums import CallStatus, IntegrationStatus
from core.settings import ExecutionSettings

from .errors import ExecutionError

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 1.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _log_id() -> str:
    return f"api_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class ExecutionOptions:
    """Per-call execution configuration."""

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    # Backoff before retry n (0-based) is retry_delay_seconds * 2**n, uncapped.
    retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS
    user_id: Optional[str] = None
    metadata: Mapping[str, object] = field(default_factory=dict)
    skip_status_check: bool = False

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")

    @classmethod
    def from_settings(cls, settings: ExecutionSettings, **overrides) -> "ExecutionOptions":
        """Build options using configured defaults, with per-call overrides."""
        values: dict[str, object] = {
            "timeout_seconds": settings.timeout_seconds,
            "max_retries": settings.max_retries,
            "retry_delay_seconds": settings.retry_delay_seconds,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class CallLogEntry:
    """Immutable record of one attempt or one terminal outcome."""

    integration_id: str
    endpoint: str
    method: str
    status: CallStatus
    duration_ms: int
    retry_count: int
    status_code: Optional[int] = None
    error_message: Optional[str] = None
    user_id: Optional[str] = None
    metadata: Mapping[str, object] = field(default_factory=dict)
    id: str = field(default_factory=_log_id)
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class ExecutionSuccess(Generic[T]):
    """Successful execution carrying the unit of work's payload."""

    data: T
    integration_id: str
    duration_ms: int
    retry_count: int
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class ExecutionFailure:
    """Failed execution carrying a structured, non-retryable error."""

    error: ExecutionError
    integration_id: str
    duration_ms: int
    retry_count: int
    success: Literal[False] = field(default=False, init=False)


ExecutionResult = Union[ExecutionSuccess[T], ExecutionFailure]


@dataclass(frozen=True)
class GatedSuccess(Generic[T]):
    """Gated function ran and returned ``data``."""

    data: T
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class GatedFailure:
    """Gated function refused to run, or raised; ``error`` is the message."""

    error: str
    success: Literal[False] = field(default=False, init=False)


GatedResult = Union[GatedSuccess[T], GatedFailure]


@dataclass(frozen=True)
class IntegrationAvailability:
    """Readiness of an integration plus the reason when it is not ready."""

    available: bool
    status: IntegrationStatus
    message: str


@dataclass(frozen=True)
class FeatureAvailability:
    available: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class HealthCheckResult:
    healthy: bool
    latency_ms: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class IntegrationCallStats:
    total: int
    success: int
    success_rate: float
    average_duration_ms: float


@dataclass(frozen=True)
class LedgerStats:
    """Aggregate statistics derived from the call ledger."""

    total_calls: int
    success_rate: float
    average_duration_ms: float
    by_integration: Mapping[str, IntegrationCallStats] = field(default_factory=dict)
