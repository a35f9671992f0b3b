"""
In-Memory Integration Registry.

Holds integration records, credentials and connectivity status for the
lifetime of the process, plus a bounded audit trail of admin actions.
"""
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional
import uuid

from core.application.interfaces import IIntegrationRegistry
from core.domain.entities import IntegrationRecord
from core.domain.entities.integration import utc_now
from core.domain.enums import (
    IntegrationCategory,
    IntegrationEnvironment,
    IntegrationStatus,
)
from core.infrastructure.logging import get_logger
from core.infrastructure.registry.catalogue import default_integrations

logger = get_logger(__name__)

AUDIT_LOG_CAPACITY = 500


@dataclass(frozen=True)
class IntegrationAuditEntry:
    """One admin action performed against the registry."""

    integration_id: str
    integration_name: str
    action: str
    details: str
    admin_id: Optional[str] = None
    previous_value: Optional[str] = None
    new_value: Optional[str] = None
    id: str = field(default_factory=lambda: f"int_log_{uuid.uuid4().hex[:12]}")
    timestamp: str = field(default_factory=lambda: utc_now().isoformat())


class InMemoryIntegrationRegistry(IIntegrationRegistry):
    """
    In-memory implementation of IIntegrationRegistry.

    Every mutation replaces the keyed record with a new immutable one, so
    concurrent readers always see either the old or the new record.
    """

    def __init__(self, integrations: Optional[Iterable[IntegrationRecord]] = None):
        """
        Initialize registry.

        Args:
            integrations: Initial records (defaults to the built-in catalogue)
        """
        records = default_integrations() if integrations is None else integrations
        self._records: Dict[str, IntegrationRecord] = {r.id: r for r in records}
        self._audit_log: deque[IntegrationAuditEntry] = deque(maxlen=AUDIT_LOG_CAPACITY)
        logger.info(f"InMemoryIntegrationRegistry initialized ({len(self._records)} integrations)")

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get_integration(self, integration_id: str) -> Optional[IntegrationRecord]:
        return self._records.get(integration_id)

    def get_credential_value(self, integration_id: str, key: str) -> Optional[str]:
        record = self._records.get(integration_id)
        if record is None:
            return None
        return record.credential_value(key)

    def list_integrations(
        self, category: Optional[IntegrationCategory] = None
    ) -> List[IntegrationRecord]:
        records = list(self._records.values())
        if category is not None:
            records = [r for r in records if r.category == category]
        return records

    def get_enabled_integrations(self) -> List[IntegrationRecord]:
        return [r for r in self._records.values() if r.is_enabled and r.is_configured]

    def get_audit_logs(self, integration_id: Optional[str] = None) -> List[IntegrationAuditEntry]:
        """Audit entries, newest first."""
        if integration_id:
            return [e for e in self._audit_log if e.integration_id == integration_id]
        return list(self._audit_log)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def add(self, record: IntegrationRecord) -> None:
        """Register (or replace) an integration record."""
        self._records[record.id] = record

    def update_status(
        self,
        integration_id: str,
        status: IntegrationStatus,
        error_message: Optional[str] = None,
    ) -> None:
        record = self._records.get(integration_id)
        if record is None:
            logger.warning(f"Status update for unknown integration ignored: {integration_id}")
            return
        self._records[integration_id] = record.evolve(status=status, last_error=error_message)
        if status != record.status:
            logger.info(
                f"Integration {integration_id} status: {record.status.value} -> {status.value}"
            )

    def save_credentials(
        self,
        integration_id: str,
        values: Mapping[str, str],
        admin_id: Optional[str] = None,
    ) -> Optional[IntegrationRecord]:
        """
        Store credential values and recompute the configured flag.

        Unknown credential keys are ignored. An integration that loses a
        required credential is also disabled.

        Args:
            integration_id: Integration identifier
            values: ``{credential_key: value}``
            admin_id: Acting admin, for the audit trail

        Returns:
            Updated record, or None for an unknown integration
        """
        record = self._records.get(integration_id)
        if record is None:
            return None

        credentials = tuple(
            replace(cred, value=values[cred.key]) if cred.key in values else cred
            for cred in record.credentials
        )
        updated = record.evolve(credentials=credentials)
        configured = updated.required_credentials_filled
        updated = updated.evolve(
            is_configured=configured,
            is_enabled=record.is_enabled and configured,
            status=IntegrationStatus.DISCONNECTED if configured else IntegrationStatus.NOT_CONFIGURED,
            last_error=None,
        )
        self._records[integration_id] = updated

        self._audit(
            updated,
            action="credentials_updated",
            details=f"Credentials updated for {updated.name}",
            admin_id=admin_id,
        )
        return updated

    def toggle_integration(
        self, integration_id: str, admin_id: Optional[str] = None
    ) -> Optional[IntegrationRecord]:
        """
        Flip the enabled flag.

        An unconfigured integration cannot be enabled; the record is
        returned unchanged in that case.
        """
        record = self._records.get(integration_id)
        if record is None:
            return None
        if not record.is_enabled and not record.is_configured:
            logger.warning(f"Refusing to enable unconfigured integration: {integration_id}")
            return record

        enabled = not record.is_enabled
        updated = record.evolve(
            is_enabled=enabled,
            status=IntegrationStatus.CONNECTED if enabled else IntegrationStatus.DISCONNECTED,
            last_error=None,
        )
        self._records[integration_id] = updated

        self._audit(
            updated,
            action="enabled" if enabled else "disabled",
            details=f"{updated.name} {'enabled' if enabled else 'disabled'}",
            admin_id=admin_id,
            previous_value=str(not enabled).lower(),
            new_value=str(enabled).lower(),
        )
        return updated

    def set_environment(
        self,
        integration_id: str,
        environment: IntegrationEnvironment,
        admin_id: Optional[str] = None,
    ) -> Optional[IntegrationRecord]:
        record = self._records.get(integration_id)
        if record is None:
            return None
        updated = record.evolve(environment=environment)
        self._records[integration_id] = updated

        self._audit(
            updated,
            action="env_changed",
            details=f"{updated.name} environment changed to {environment.value}",
            admin_id=admin_id,
            previous_value=record.environment.value,
            new_value=environment.value,
        )
        return updated

    def _audit(self, record: IntegrationRecord, action: str, details: str, **extra) -> None:
        self._audit_log.appendleft(
            IntegrationAuditEntry(
                integration_id=record.id,
                integration_name=record.name,
                action=action,
                details=details,
                **extra,
            )
        )
