"""Central API execution layer - every outbound integration call goes through here."""

from typing import Optional

from core.application.interfaces import IIntegrationRegistry
from core.settings import ExecutionSettings, get_app_settings

from .errors import ExecutionError, HTTPStatusError, RequestTimeoutError
from .executor import APIExecutor
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
    GatedFailure,
    GatedResult,
    GatedSuccess,
    HealthCheckResult,
    IntegrationAvailability,
    IntegrationCallStats,
    LedgerStats,
)
from .readiness import get_integration_status, is_feature_available, is_integration_ready

__all__ = [
    "APIExecutor",
    "CallLedger",
    "CallLogEntry",
    "ExecutionError",
    "ExecutionFailure",
    "ExecutionOptions",
    "ExecutionResult",
    "ExecutionSuccess",
    "FeatureAvailability",
    "GatedFailure",
    "GatedResult",
    "GatedSuccess",
    "HTTPStatusError",
    "HealthCheckResult",
    "HealthChecker",
    "HealthProbe",
    "IntegrationAvailability",
    "IntegrationCallStats",
    "LedgerStats",
    "RequestTimeoutError",
    "create_default_executor",
    "create_gated_function",
    "get_integration_status",
    "is_feature_available",
    "is_integration_ready",
]


def create_default_executor(
    registry: Optional[IIntegrationRegistry] = None,
    settings: Optional[ExecutionSettings] = None,
) -> APIExecutor:
    """Create an executor with its own ledger.

    Args:
        registry: Integration registry (seeded from the environment when omitted)
        settings: Execution settings (application settings when omitted)

    Returns:
        APIExecutor instance
    """
    if registry is None:
        from core.infrastructure.registry import build_registry_from_settings

        registry = build_registry_from_settings()
    return APIExecutor(
        registry=registry,
        settings=settings or get_app_settings().execution,
    )
