"""
Integration Entity.

Snapshot of one external integration as held by the integration registry.
Records are immutable: the registry replaces a record wholesale on every
change, so readers never observe a half-applied update.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.enums import (
    IntegrationCategory,
    IntegrationEnvironment,
    IntegrationStatus,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IntegrationCredential:
    """A single credential slot declared by an integration."""

    key: str
    label: str
    required: bool = True
    secret: bool = False
    value: Optional[str] = None

    @property
    def is_filled(self) -> bool:
        return bool(self.value and self.value.strip())


@dataclass(frozen=True)
class IntegrationRecord:
    """
    Registry entry for an external integration.

    Attributes:
        id: Stable integration identifier (e.g. ``paystack``)
        name: Display name
        provider: Vendor behind the integration
        category: Functional area
        is_enabled: Admin on/off switch
        is_configured: True when every required credential is filled
        environment: Provider environment (demo/live)
        status: Last known connectivity status
        credentials: Declared credential slots
        last_error: Message of the last failure, if any
    """

    id: str
    name: str
    provider: str
    category: IntegrationCategory
    is_enabled: bool = False
    is_configured: bool = False
    environment: IntegrationEnvironment = IntegrationEnvironment.DEMO
    status: IntegrationStatus = IntegrationStatus.NOT_CONFIGURED
    credentials: tuple[IntegrationCredential, ...] = ()
    last_error: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def credential(self, key: str) -> Optional[IntegrationCredential]:
        for cred in self.credentials:
            if cred.key == key:
                return cred
        return None

    def credential_value(self, key: str) -> Optional[str]:
        cred = self.credential(key)
        return cred.value if cred else None

    @property
    def required_credentials_filled(self) -> bool:
        return all(c.is_filled for c in self.credentials if c.required)

    def evolve(self, **changes) -> "IntegrationRecord":
        """Return a copy with ``changes`` applied and ``updated_at`` refreshed."""
        changes.setdefault("updated_at", utc_now())
        return replace(self, **changes)
