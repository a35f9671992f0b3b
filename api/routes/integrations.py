"""
Integration readiness and API call observability endpoints.

Read-only: nothing here changes integration configuration.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_executor, get_registry
from core.domain.entities import IntegrationRecord
from core.infrastructure.registry import InMemoryIntegrationRegistry
from execution_layer import APIExecutor, CallLogEntry


router = APIRouter()


def _require_integration(executor: APIExecutor, integration_id: str) -> IntegrationRecord:
    record = executor.registry.get_integration(integration_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Integration {integration_id} not found",
        )
    return record


def _serialize_entry(entry: CallLogEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "integration_id": entry.integration_id,
        "endpoint": entry.endpoint,
        "method": entry.method,
        "status": entry.status.value,
        "status_code": entry.status_code,
        "duration_ms": entry.duration_ms,
        "error_message": entry.error_message,
        "retry_count": entry.retry_count,
        "timestamp": entry.timestamp.isoformat(),
        "user_id": entry.user_id,
        "metadata": dict(entry.metadata),
    }


@router.get("/integrations")
async def list_integrations(
    registry: InMemoryIntegrationRegistry = Depends(get_registry),
    executor: APIExecutor = Depends(get_executor),
) -> List[Dict[str, Any]]:
    """
    List known integrations with their readiness.

    Credential values are never returned.
    """
    integrations = []
    for record in registry.list_integrations():
        availability = executor.get_integration_status(record.id)
        integrations.append(
            {
                "id": record.id,
                "name": record.name,
                "provider": record.provider,
                "category": record.category.value,
                "environment": record.environment.value,
                "is_enabled": record.is_enabled,
                "is_configured": record.is_configured,
                "status": record.status.value,
                "available": availability.available,
            }
        )
    return integrations


@router.get("/integrations/{integration_id}/status")
async def get_integration_status(
    integration_id: str,
    executor: APIExecutor = Depends(get_executor),
) -> Dict[str, Any]:
    _require_integration(executor, integration_id)
    availability = executor.get_integration_status(integration_id)
    return {
        "integration_id": integration_id,
        "available": availability.available,
        "status": availability.status.value,
        "message": availability.message,
    }


@router.get("/integrations/{integration_id}/availability")
async def get_feature_availability(
    integration_id: str,
    executor: APIExecutor = Depends(get_executor),
) -> Dict[str, Any]:
    """Feature gating view; unknown integrations are reported as unavailable."""
    availability = executor.is_feature_available(integration_id)
    return {
        "integration_id": integration_id,
        "available": availability.available,
        "reason": availability.reason,
    }


@router.get("/api-calls")
async def get_api_call_logs(
    integration_id: Optional[str] = Query(default=None),
    limit: int = Query(default=100, ge=1, le=1000),
    executor: APIExecutor = Depends(get_executor),
) -> List[Dict[str, Any]]:
    """Most recent API call ledger entries, newest first."""
    entries = executor.get_api_call_logs(integration_id)[:limit]
    return [_serialize_entry(entry) for entry in entries]


@router.get("/api-calls/stats")
async def get_api_stats(executor: APIExecutor = Depends(get_executor)) -> Dict[str, Any]:
    stats = executor.get_api_stats()
    return {
        "total_calls": stats.total_calls,
        "success_rate": stats.success_rate,
        "average_duration_ms": stats.average_duration_ms,
        "by_integration": {
            integration_id: {
                "total": item.total,
                "success": item.success,
                "success_rate": item.success_rate,
                "average_duration_ms": item.average_duration_ms,
            }
            for integration_id, item in stats.by_integration.items()
        },
    }
