"""Health checks - per-integration liveness probes with latency measurement."""

import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional

from core.application.interfaces import IIntegrationRegistry
from core.domain.entities import IntegrationRecord
from core.infrastructure.logging import get_logger
from core.infrastructure.registry.credential_checks import check_credentials

from .models import HealthCheckResult
from .readiness import get_integration_status

logger = get_logger(__name__)

HealthProbe = Callable[[IntegrationRecord], Awaitable[None]]

DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS = 10.0


async def credential_probe(record: IntegrationRecord) -> None:
    """Default probe: offline credential format validation."""
    problem = check_credentials(record)
    if problem:
        raise ValueError(problem)


class HealthChecker:
    """
    Runs a lightweight probe against a ready integration.

    Probes raise to signal an unhealthy integration. Health checks never
    write to the registry.
    """

    def __init__(
        self,
        registry: IIntegrationRegistry,
        timeout_seconds: float = DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS,
        probes: Optional[Dict[str, HealthProbe]] = None,
    ) -> None:
        self._registry = registry
        self._timeout_seconds = timeout_seconds
        self._probes: Dict[str, HealthProbe] = dict(probes or {})

    def register_probe(self, integration_id: str, probe: HealthProbe) -> None:
        self._probes[integration_id] = probe

    async def check(self, integration_id: str) -> HealthCheckResult:
        """
        Probe an integration.

        Args:
            integration_id: Integration identifier

        Returns:
            HealthCheckResult; latency is only measured when a probe ran
        """
        availability = get_integration_status(self._registry, integration_id)
        if not availability.available:
            return HealthCheckResult(healthy=False, error=availability.message)

        record = self._registry.get_integration(integration_id)
        if record is None:
            # Removed between the readiness read and now.
            return HealthCheckResult(healthy=False, error=availability.message)

        probe = self._probes.get(integration_id, credential_probe)
        started = time.monotonic()
        try:
            await asyncio.wait_for(probe(record), timeout=self._timeout_seconds)
        except asyncio.TimeoutError:
            error = f"Health check timeout after {int(self._timeout_seconds * 1000)}ms"
        except Exception as exc:
            error = str(exc) or "Health check failed"
        else:
            return HealthCheckResult(healthy=True, latency_ms=_elapsed_ms(started))

        logger.warning(f"Health check failed for {integration_id}: {error}")
        return HealthCheckResult(healthy=False, latency_ms=_elapsed_ms(started), error=error)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
