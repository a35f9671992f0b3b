"""APIExecutor - the single chokepoint for outbound calls to external integrations."""

import asyncio
import time
from typing import Any, Awaitable, Callable, Mapping, Optional, Set, TypeVar

import aiohttp

from core.application.interfaces import IIntegrationRegistry
from core.domain.enums import CallStatus, IntegrationStatus
from core.infrastructure.logging import get_logger
from core.settings import ExecutionSettings

from .errors import (
    ExecutionError,
    HTTPStatusError,
    RequestTimeoutError,
    is_timeout_error,
    status_code_of,
)
from .gating import create_gated_function
from .health import HealthChecker, HealthProbe
from .ledger import CallLedger
from .models import (
    CallLogEntry,
    ExecutionFailure,
    ExecutionOptions,
    ExecutionResult,
    ExecutionSuccess,
    FeatureAvailability,
    GatedResult,
    HealthCheckResult,
    IntegrationAvailability,
    LedgerStats,
)
from .readiness import get_integration_status, is_feature_available

T = TypeVar("T")

UnitOfWork = Callable[[], Awaitable[T]]
Sleep = Callable[[float], Awaitable[None]]

CUSTOM_METHOD = "CUSTOM"


class APIExecutor:
    """
    Runs units of work against external integrations with readiness
    gating, a per-attempt deadline, bounded exponential-backoff retries,
    call ledger recording and registry status reconciliation.

    Every public execution method returns an ExecutionResult; exceptions
    from the unit of work never reach the caller.
    """

    def __init__(
        self,
        registry: IIntegrationRegistry,
        ledger: Optional[CallLedger] = None,
        settings: Optional[ExecutionSettings] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize executor.

        Args:
            registry: Integration registry (read for readiness, written for status)
            ledger: Call ledger owned by this executor (a fresh one by default)
            settings: Configured execution defaults
            sleep: Coroutine used for backoff delays
        """
        self._registry = registry
        self._sleep = sleep
        if settings is not None:
            self._default_options = ExecutionOptions.from_settings(settings)
            self._ledger = ledger or CallLedger(settings.ledger_capacity)
            self._health = HealthChecker(registry, settings.health_check_timeout_seconds)
        else:
            self._default_options = ExecutionOptions()
            self._ledger = ledger or CallLedger()
            self._health = HealthChecker(registry)
        self._abandoned: Set[asyncio.Future] = set()
        self._logger = get_logger("execution_layer.executor")

    @property
    def registry(self) -> IIntegrationRegistry:
        return self._registry

    @property
    def ledger(self) -> CallLedger:
        return self._ledger

    @property
    def default_options(self) -> ExecutionOptions:
        return self._default_options

    @property
    def abandoned_attempts(self) -> int:
        """Timed-out attempts that are still running in the background."""
        return len(self._abandoned)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(
        self,
        integration_id: str,
        endpoint: str,
        method: str,
        unit_of_work: UnitOfWork[T],
        options: Optional[ExecutionOptions] = None,
    ) -> ExecutionResult[T]:
        """Execute a unit of work with retry and timeout handling.

        Args:
            integration_id: Integration the work is performed against
            endpoint: URL or logical description, for the ledger
            method: HTTP verb or ``CUSTOM``
            unit_of_work: Zero-argument coroutine function; called once per attempt
            options: Per-call options (executor defaults when omitted)

        Returns:
            ExecutionSuccess or ExecutionFailure
        """
        opts = options or self._default_options
        call_started = time.monotonic()

        if not opts.skip_status_check:
            availability = get_integration_status(self._registry, integration_id)
            if not availability.available:
                self._logger.warning(
                    f"Call to {integration_id} ({method} {endpoint}) rejected: {availability.message}"
                )
                self._record(
                    integration_id, endpoint, method, opts,
                    status=CallStatus.ERROR,
                    duration_ms=0,
                    retry_count=0,
                    error_message=availability.message,
                )
                return ExecutionFailure(
                    error=ExecutionError(availability.message, integration_id, is_retryable=False),
                    integration_id=integration_id,
                    duration_ms=0,
                    retry_count=0,
                )

        retry_count = 0
        last_error: Optional[Exception] = None

        while retry_count <= opts.max_retries:
            attempt_started = time.monotonic()
            try:
                data = await self._race(unit_of_work, opts.timeout_seconds)
            except Exception as exc:
                last_error = exc
                self._logger.warning(
                    f"Attempt {retry_count + 1}/{opts.max_retries + 1} for {integration_id} "
                    f"({method} {endpoint}) failed: {exc}"
                )
                if retry_count >= opts.max_retries:
                    break

                self._record(
                    integration_id, endpoint, method, opts,
                    status=CallStatus.RETRY,
                    duration_ms=_elapsed_ms(attempt_started),
                    retry_count=retry_count,
                    status_code=status_code_of(exc),
                    error_message=str(exc),
                )
                await self._sleep(opts.retry_delay_seconds * (2 ** retry_count))
                retry_count += 1
                continue

            self._record(
                integration_id, endpoint, method, opts,
                status=CallStatus.SUCCESS,
                duration_ms=_elapsed_ms(attempt_started),
                retry_count=retry_count,
            )
            self._set_status(integration_id, IntegrationStatus.CONNECTED)
            duration_ms = _elapsed_ms(call_started)
            self._logger.info(
                f"Call to {integration_id} ({method} {endpoint}) succeeded "
                f"in {duration_ms}ms after {retry_count} retries"
            )
            return ExecutionSuccess(
                data=data,
                integration_id=integration_id,
                duration_ms=duration_ms,
                retry_count=retry_count,
            )

        duration_ms = _elapsed_ms(call_started)
        message = (str(last_error) if last_error else "") or "API call failed"
        status_code = status_code_of(last_error)

        self._record(
            integration_id, endpoint, method, opts,
            status=CallStatus.TIMEOUT if is_timeout_error(last_error) else CallStatus.ERROR,
            duration_ms=duration_ms,
            retry_count=retry_count,
            status_code=status_code,
            error_message=message,
        )
        self._set_status(integration_id, IntegrationStatus.ERROR, message)
        self._logger.error(
            f"Call to {integration_id} ({method} {endpoint}) failed after "
            f"{retry_count} retries in {duration_ms}ms: {message}"
        )

        return ExecutionFailure(
            error=ExecutionError(
                message,
                integration_id,
                status_code=status_code,
                is_retryable=False,
                original_error=last_error,
            ),
            integration_id=integration_id,
            duration_ms=duration_ms,
            retry_count=retry_count,
        )

    async def execute_api(
        self,
        integration_id: str,
        description: str,
        unit_of_work: UnitOfWork[T],
        options: Optional[ExecutionOptions] = None,
    ) -> ExecutionResult[T]:
        """Execute a custom (non-HTTP or hand-built) unit of work."""
        return await self.execute(integration_id, description, CUSTOM_METHOD, unit_of_work, options)

    async def execute_fetch(
        self,
        integration_id: str,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        options: Optional[ExecutionOptions] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> ExecutionResult[Any]:
        """Perform an HTTP request and decode its JSON body.

        Any non-2xx response is treated as a failed attempt carrying the
        status code and reason.

        Args:
            integration_id: Integration the request belongs to
            url: Request URL
            method: HTTP verb
            headers: Request headers
            params: Query parameters
            json: JSON body
            data: Raw/form body
            options: Per-call options
            session: Shared aiohttp session (a short-lived one per attempt otherwise)

        Returns:
            ExecutionResult whose payload is the decoded JSON body
        """
        method = method.upper()

        async def fetch_json(client: aiohttp.ClientSession) -> Any:
            async with client.request(
                method, url, headers=headers, params=params, json=json, data=data
            ) as response:
                if not 200 <= response.status < 300:
                    raise HTTPStatusError(response.status, response.reason or "")
                return await response.json(content_type=None)

        async def unit_of_work() -> Any:
            if session is not None:
                return await fetch_json(session)
            async with aiohttp.ClientSession() as client:
                return await fetch_json(client)

        return await self.execute(integration_id, url, method, unit_of_work, options)

    def create_gated_function(
        self,
        integration_id: str,
        fn: Callable[..., Awaitable[T]],
        fallback_message: str = "",
    ) -> Callable[..., Awaitable[GatedResult[T]]]:
        return create_gated_function(self._registry, integration_id, fn, fallback_message)

    # ------------------------------------------------------------------
    # Readiness and observability
    # ------------------------------------------------------------------

    def is_integration_ready(self, integration_id: str) -> bool:
        return self.get_integration_status(integration_id).available

    def get_integration_status(self, integration_id: str) -> IntegrationAvailability:
        return get_integration_status(self._registry, integration_id)

    def is_feature_available(self, integration_id: str) -> FeatureAvailability:
        return is_feature_available(self._registry, integration_id)

    def get_api_call_logs(self, integration_id: Optional[str] = None) -> list[CallLogEntry]:
        return self._ledger.entries(integration_id)

    def get_api_stats(self) -> LedgerStats:
        return self._ledger.stats()

    def register_health_probe(self, integration_id: str, probe: HealthProbe) -> None:
        self._health.register_probe(integration_id, probe)

    async def check_api_health(self, integration_id: str) -> HealthCheckResult:
        return await self._health.check(integration_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _race(self, unit_of_work: UnitOfWork[T], timeout_seconds: float) -> T:
        """Run one attempt against its deadline; first to settle wins.

        The losing attempt is not cancelled. It is parked until it settles
        and its outcome is discarded.
        """
        task = asyncio.ensure_future(unit_of_work())
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
        except asyncio.CancelledError:
            self._abandon(task)
            raise
        if task in done:
            if task.cancelled():
                # Only the attempt was cancelled, not the caller.
                raise RuntimeError("Unit of work was cancelled")
            return task.result()
        self._abandon(task)
        raise RequestTimeoutError(timeout_seconds)

    def _abandon(self, task: asyncio.Future) -> None:
        self._abandoned.add(task)
        task.add_done_callback(self._settle_abandoned)

    def _settle_abandoned(self, task: asyncio.Future) -> None:
        self._abandoned.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._logger.info(f"Late failure from abandoned attempt ignored: {exc}")

    def _record(
        self,
        integration_id: str,
        endpoint: str,
        method: str,
        options: ExecutionOptions,
        *,
        status: CallStatus,
        duration_ms: int,
        retry_count: int,
        status_code: Optional[int] = None,
        error_message: Optional[str] = None,
    ) -> None:
        self._ledger.append(
            CallLogEntry(
                integration_id=integration_id,
                endpoint=endpoint,
                method=method,
                status=status,
                duration_ms=duration_ms,
                retry_count=retry_count,
                status_code=status_code,
                error_message=error_message,
                user_id=options.user_id,
                metadata=dict(options.metadata),
            )
        )

    def _set_status(
        self,
        integration_id: str,
        status: IntegrationStatus,
        error_message: Optional[str] = None,
    ) -> None:
        # The registry is an external collaborator; a failing write must not
        # turn into an exception for the caller.
        try:
            self._registry.update_status(integration_id, status, error_message)
        except Exception:
            self._logger.error(
                f"Failed to update status of {integration_id} to {status.value}",
                exc_info=True,
            )


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
