"""Tests for integration health checks."""

import asyncio

import pytest

from core.domain.enums import IntegrationEnvironment, IntegrationStatus
from execution_layer import APIExecutor, HealthChecker
from execution_layer.readiness import NOT_CONFIGURED_MESSAGE


@pytest.mark.asyncio
async def test_not_ready_integration_is_unhealthy_without_latency(executor: APIExecutor):
    result = await executor.check_api_health("facial_recognition")

    assert result.healthy is False
    assert result.latency_ms is None
    assert result.error == NOT_CONFIGURED_MESSAGE


@pytest.mark.asyncio
async def test_default_probe_checks_credentials(executor: APIExecutor):
    result = await executor.check_api_health("paystack")

    assert result.healthy is True
    assert result.latency_ms is not None
    assert result.latency_ms >= 0
    assert result.error is None


@pytest.mark.asyncio
async def test_bad_credentials_are_unhealthy_without_status_change(executor: APIExecutor, registry):
    registry.set_environment("paystack", IntegrationEnvironment.LIVE)

    result = await executor.check_api_health("paystack")

    assert result.healthy is False
    assert result.latency_ms is not None
    assert result.error == "Live mode requires live keys (pk_live_* and sk_live_*)"
    assert registry.get_integration("paystack").status == IntegrationStatus.CONNECTED


@pytest.mark.asyncio
async def test_custom_probe_is_used(executor: APIExecutor):
    probed = []

    async def ping(record) -> None:
        probed.append(record.id)
        raise ConnectionError("ping failed")

    executor.register_health_probe("openai", ping)

    result = await executor.check_api_health("openai")

    assert probed == ["openai"]
    assert result.healthy is False
    assert result.error == "ping failed"


@pytest.mark.asyncio
async def test_probe_timeout(registry):
    async def hangs(record) -> None:
        await asyncio.sleep(1)

    checker = HealthChecker(registry, timeout_seconds=0.02, probes={"openai": hangs})

    result = await checker.check("openai")

    assert result.healthy is False
    assert result.error == "Health check timeout after 20ms"
