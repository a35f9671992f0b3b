"""
API tests for the integration readiness and call observability endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_executor, get_registry
from api.main import app
from core.domain.enums import CallStatus
from execution_layer import APIExecutor, CallLogEntry


@pytest.fixture
def client(registry, executor: APIExecutor):
    """TestClient wired to the per-test registry and executor."""
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_executor] = lambda: executor
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def populated_executor(executor: APIExecutor) -> APIExecutor:
    executor.ledger.append(
        CallLogEntry(
            integration_id="paystack",
            endpoint="/transaction/initialize",
            method="POST",
            status=CallStatus.SUCCESS,
            duration_ms=100,
            retry_count=0,
            user_id="user-1",
        )
    )
    executor.ledger.append(
        CallLogEntry(
            integration_id="paystack",
            endpoint="/transaction/verify",
            method="GET",
            status=CallStatus.ERROR,
            duration_ms=300,
            retry_count=2,
            status_code=502,
            error_message="HTTP 502: Bad Gateway",
        )
    )
    executor.ledger.append(
        CallLogEntry(
            integration_id="openai",
            endpoint="chat_completion",
            method="CUSTOM",
            status=CallStatus.SUCCESS,
            duration_ms=200,
            retry_count=0,
        )
    )
    return executor


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_service_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_integrations_hides_credentials(client):
    response = client.get("/api/v1/integrations")

    assert response.status_code == 200
    data = {item["id"]: item for item in response.json()}
    assert len(data) == 7
    assert data["paystack"]["available"] is True
    assert data["google_maps"]["available"] is False
    assert data["google_maps"]["is_configured"] is True
    assert "credentials" not in data["paystack"]
    assert "sk_test_456" not in response.text


def test_integration_status(client):
    response = client.get("/api/v1/integrations/google_maps/status")

    assert response.status_code == 200
    assert response.json() == {
        "integration_id": "google_maps",
        "available": False,
        "status": "disconnected",
        "message": "Integration is disabled. Please contact administrator.",
    }


def test_integration_status_unknown_is_404(client):
    response = client.get("/api/v1/integrations/nope/status")

    assert response.status_code == 404
    assert response.json()["detail"] == "Integration nope not found"


def test_feature_availability_for_unknown_integration(client):
    response = client.get("/api/v1/integrations/nope/availability")

    assert response.status_code == 200
    assert response.json()["available"] is False
    assert response.json()["reason"] == "Integration not configured. Please contact administrator."


def test_feature_availability_ready(client):
    response = client.get("/api/v1/integrations/openai/availability")

    assert response.json() == {"integration_id": "openai", "available": True, "reason": None}


def test_integration_health(client):
    response = client.get("/api/v1/integrations/paystack/health")

    assert response.status_code == 200
    body = response.json()
    assert body["healthy"] is True
    assert body["error"] is None
    assert body["latency_ms"] >= 0


def test_integration_health_not_ready(client):
    response = client.get("/api/v1/integrations/facial_recognition/health")

    body = response.json()
    assert body["healthy"] is False
    assert body["latency_ms"] is None
    assert body["error"] == "Integration not configured. Please contact administrator."


def test_integration_health_unknown_is_404(client):
    response = client.get("/api/v1/integrations/nope/health")

    assert response.status_code == 404


def test_api_call_logs(client, populated_executor):
    response = client.get("/api/v1/api-calls")

    assert response.status_code == 200
    logs = response.json()
    assert [log["integration_id"] for log in logs] == ["openai", "paystack", "paystack"]
    assert logs[1]["status"] == "error"
    assert logs[1]["status_code"] == 502
    assert logs[2]["user_id"] == "user-1"


def test_api_call_logs_filter_and_limit(client, populated_executor):
    response = client.get("/api/v1/api-calls", params={"integration_id": "paystack", "limit": 1})

    logs = response.json()
    assert len(logs) == 1
    assert logs[0]["endpoint"] == "/transaction/verify"


def test_api_call_logs_limit_validation(client):
    response = client.get("/api/v1/api-calls", params={"limit": 0})

    assert response.status_code == 422


def test_api_stats(client, populated_executor):
    response = client.get("/api/v1/api-calls/stats")

    stats = response.json()
    assert stats["total_calls"] == 3
    assert stats["success_rate"] == pytest.approx(200 / 3)
    assert stats["average_duration_ms"] == pytest.approx(200)
    assert stats["by_integration"]["paystack"] == {
        "total": 2,
        "success": 1,
        "success_rate": 50.0,
        "average_duration_ms": 200.0,
    }


def test_api_stats_empty(client):
    stats = client.get("/api/v1/api-calls/stats").json()

    assert stats == {
        "total_calls": 0,
        "success_rate": 0.0,
        "average_duration_ms": 0.0,
        "by_integration": {},
    }
