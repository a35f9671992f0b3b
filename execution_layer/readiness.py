"""Readiness gate - derives whether an integration may currently be called."""

from core.application.interfaces import IIntegrationRegistry
from core.domain.enums import IntegrationStatus

from .models import FeatureAvailability, IntegrationAvailability

# Stable, user-facing messages. UI layers branch on "not configured" vs
# "disabled" to choose between an admin-contact hint and a retry button.
NOT_CONFIGURED_MESSAGE = "Integration not configured. Please contact administrator."
DISABLED_MESSAGE = "Integration is disabled. Please contact administrator."
ERROR_MESSAGE = "Integration has encountered an error."
NOT_CONNECTED_MESSAGE = "Integration is not connected."
READY_MESSAGE = "Integration is ready"


def get_integration_status(
    registry: IIntegrationRegistry, integration_id: str
) -> IntegrationAvailability:
    """
    Evaluate readiness of an integration.

    Checks, in order: the integration exists, is configured, is enabled and
    was last seen ``connected``. The first failing check decides the result.
    An unknown integration is reported exactly like an unconfigured one.

    Args:
        registry: Integration registry to read from
        integration_id: Integration identifier

    Returns:
        IntegrationAvailability with the reason when not available
    """
    record = registry.get_integration(integration_id)

    if record is None or not record.is_configured:
        return IntegrationAvailability(
            available=False,
            status=IntegrationStatus.NOT_CONFIGURED,
            message=NOT_CONFIGURED_MESSAGE,
        )

    if not record.is_enabled:
        return IntegrationAvailability(
            available=False,
            status=IntegrationStatus.DISCONNECTED,
            message=DISABLED_MESSAGE,
        )

    if record.status == IntegrationStatus.ERROR:
        return IntegrationAvailability(
            available=False,
            status=IntegrationStatus.ERROR,
            message=record.last_error or ERROR_MESSAGE,
        )

    if record.status != IntegrationStatus.CONNECTED:
        return IntegrationAvailability(
            available=False,
            status=record.status,
            message=NOT_CONNECTED_MESSAGE,
        )

    return IntegrationAvailability(
        available=True,
        status=IntegrationStatus.CONNECTED,
        message=READY_MESSAGE,
    )


def is_integration_ready(registry: IIntegrationRegistry, integration_id: str) -> bool:
    return get_integration_status(registry, integration_id).available


def is_feature_available(
    registry: IIntegrationRegistry, integration_id: str
) -> FeatureAvailability:
    status = get_integration_status(registry, integration_id)
    return FeatureAvailability(
        available=status.available,
        reason=None if status.available else status.message,
    )
