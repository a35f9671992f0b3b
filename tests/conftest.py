"""Shared fixtures: an isolated integration registry and executor per test."""

import pytest

from core.infrastructure.registry import InMemoryIntegrationRegistry
from execution_layer import APIExecutor


class SleepRecorder:
    """Stand-in for asyncio.sleep that records backoff delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def registry() -> InMemoryIntegrationRegistry:
    """
    Registry with:
    - paystack, openai: configured, enabled, connected
    - google_maps: configured but disabled
    - facial_recognition and the rest: not configured
    """
    registry = InMemoryIntegrationRegistry()

    registry.save_credentials(
        "paystack",
        {"PAYSTACK_PUBLIC_KEY": "pk_test_123", "PAYSTACK_SECRET_KEY": "sk_test_456"},
    )
    registry.toggle_integration("paystack")

    registry.save_credentials("openai", {"OPENAI_API_KEY": "sk-abc"})
    registry.toggle_integration("openai")

    registry.save_credentials("google_maps", {"GOOGLE_MAPS_API_KEY": "AIzaSyTest"})

    return registry


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def executor(registry: InMemoryIntegrationRegistry, sleeps: SleepRecorder) -> APIExecutor:
    return APIExecutor(registry=registry, sleep=sleeps)
