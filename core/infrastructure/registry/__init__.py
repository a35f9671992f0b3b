"""Integration registry - in-memory store seeded from settings."""

from dataclasses import replace
from typing import Optional

from core.domain.enums import IntegrationStatus
from core.infrastructure.logging import get_logger
from core.settings import IntegrationCredentialsSettings, get_app_settings

from .catalogue import default_integrations
from .credential_checks import check_credentials
from .in_memory_registry import IntegrationAuditEntry, InMemoryIntegrationRegistry

logger = get_logger(__name__)

__all__ = [
    "IntegrationAuditEntry",
    "InMemoryIntegrationRegistry",
    "build_registry_from_settings",
    "check_credentials",
    "default_integrations",
]


def build_registry_from_settings(
    settings: Optional[IntegrationCredentialsSettings] = None,
) -> InMemoryIntegrationRegistry:
    """
    Create a registry seeded with credentials from the environment.

    Integrations whose required credentials are all present become
    configured; configured integrations listed in
    ``MARKETHUB_ENABLED_INTEGRATIONS`` are enabled and start ``connected``.

    Args:
        settings: Credential settings (defaults to the application settings)

    Returns:
        Seeded InMemoryIntegrationRegistry
    """
    settings = settings or get_app_settings().integrations
    values = settings.credential_values()
    enabled_ids = settings.enabled_ids

    records = []
    for record in default_integrations():
        known = {c.key for c in record.credentials}
        provided = {k: v for k, v in values.items() if k in known}
        credentials = tuple(
            replace(c, value=provided.get(c.key, c.value))
            for c in record.credentials
        )
        record = record.evolve(credentials=credentials)
        configured = record.required_credentials_filled
        enabled = configured and record.id in enabled_ids
        if enabled:
            status = IntegrationStatus.CONNECTED
        elif configured:
            status = IntegrationStatus.DISCONNECTED
        else:
            status = IntegrationStatus.NOT_CONFIGURED
        record = record.evolve(
            is_configured=configured,
            is_enabled=enabled,
            status=status,
            environment=settings.environment or record.environment,
        )
        if record.id in enabled_ids and not configured:
            logger.warning(f"Integration {record.id} requested enabled but is missing credentials")
        records.append(record)

    return InMemoryIntegrationRegistry(records)
