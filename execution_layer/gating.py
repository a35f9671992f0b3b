"""Gated function factory - readiness-checked pass-through wrappers."""

import functools
from typing import Awaitable, Callable, TypeVar

from core.application.interfaces import IIntegrationRegistry
from core.domain.enums import IntegrationStatus
from core.infrastructure.logging import get_logger

from .models import GatedFailure, GatedResult, GatedSuccess
from .readiness import get_integration_status

T = TypeVar("T")

logger = get_logger(__name__)


def create_gated_function(
    registry: IIntegrationRegistry,
    integration_id: str,
    fn: Callable[..., Awaitable[T]],
    fallback_message: str = "",
) -> Callable[..., Awaitable[GatedResult[T]]]:
    """
    Wrap ``fn`` so it only runs while ``integration_id`` is ready.

    No retries and no deadline: the wrapper checks readiness, calls ``fn``
    once, and marks the integration ``error`` if ``fn`` raises.

    Args:
        registry: Integration registry
        integration_id: Integration the function depends on
        fn: Async function to wrap
        fallback_message: Message returned when the integration is not
            ready (the readiness message is used when empty)

    Returns:
        Async function with the same arguments returning a GatedResult
    """

    @functools.wraps(fn)
    async def gated(*args, **kwargs) -> GatedResult[T]:
        availability = get_integration_status(registry, integration_id)
        if not availability.available:
            return GatedFailure(error=fallback_message or availability.message)

        try:
            data = await fn(*args, **kwargs)
        except Exception as exc:
            message = str(exc) or "Operation failed"
            logger.warning(f"Gated call to {integration_id} failed: {message}")
            try:
                registry.update_status(integration_id, IntegrationStatus.ERROR, message)
            except Exception:
                logger.error(
                    f"Failed to update status of {integration_id} to "
                    f"{IntegrationStatus.ERROR.value}",
                    exc_info=True,
                )
            return GatedFailure(error=message)

        return GatedSuccess(data=data)

    return gated
