"""
Health check endpoints.

Service liveness plus per-integration health probes.
"""
from datetime import datetime, timezone
import platform

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_executor
from execution_layer import APIExecutor


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "markethub-api-layer",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/api/v1/integrations/{integration_id}/health")
async def integration_health_check(
    integration_id: str,
    executor: APIExecutor = Depends(get_executor),
):
    """
    Probe a single integration.

    Unknown integrations are 404; known but not ready integrations report
    unhealthy without running a probe.
    """
    if executor.registry.get_integration(integration_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Integration {integration_id} not found",
        )

    result = await executor.check_api_health(integration_id)
    return {
        "integration_id": integration_id,
        "healthy": result.healthy,
        "latency_ms": result.latency_ms,
        "error": result.error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
