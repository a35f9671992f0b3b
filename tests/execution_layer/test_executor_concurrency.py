"""Tests for APIExecutor - concurrent calls sharing the ledger and registry."""

import asyncio

import pytest

from core.domain.enums import CallStatus, IntegrationStatus
from execution_layer import APIExecutor, ExecutionOptions


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fail_delay, success_delay, final_status",
    [
        (0.01, 0.08, IntegrationStatus.CONNECTED),
        (0.08, 0.01, IntegrationStatus.ERROR),
    ],
)
async def test_last_finished_call_sets_registry_status(
    executor: APIExecutor, registry, fail_delay, success_delay, final_status
):
    async def failing() -> None:
        await asyncio.sleep(fail_delay)
        raise ConnectionError("gateway unreachable")

    async def succeeding() -> str:
        await asyncio.sleep(success_delay)
        return "ok"

    failed, succeeded = await asyncio.gather(
        executor.execute_api("paystack", "refund", failing, ExecutionOptions(max_retries=1)),
        executor.execute_api("paystack", "verify", succeeding, ExecutionOptions(max_retries=1)),
    )

    assert failed.success is False
    assert succeeded.success is True
    assert registry.get_integration("paystack").status == final_status


@pytest.mark.asyncio
async def test_concurrent_calls_keep_their_own_entry_order(executor: APIExecutor):
    counter = {"n": 0}

    async def refund() -> str:
        counter["n"] += 1
        await asyncio.sleep(0.01)
        if counter["n"] <= 2:
            raise ConnectionError("refund failed")
        return "refunded"

    async def always_failing() -> None:
        await asyncio.sleep(0.005)
        raise ValueError("bad request")

    await asyncio.gather(
        executor.execute_api("paystack", "refund", refund, ExecutionOptions(max_retries=3)),
        executor.execute_api("paystack", "charge", always_failing, ExecutionOptions(max_retries=2)),
    )

    oldest_first = list(reversed(executor.get_api_call_logs("paystack")))
    by_endpoint = {
        endpoint: [(log.status, log.retry_count) for log in oldest_first if log.endpoint == endpoint]
        for endpoint in ("refund", "charge")
    }

    assert by_endpoint["refund"] == [
        (CallStatus.RETRY, 0),
        (CallStatus.RETRY, 1),
        (CallStatus.SUCCESS, 2),
    ]
    assert by_endpoint["charge"] == [
        (CallStatus.RETRY, 0),
        (CallStatus.RETRY, 1),
        (CallStatus.ERROR, 2),
    ]
    assert len(oldest_first) == 6
