"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Optional

from core.domain.entities import IntegrationRecord
from core.domain.enums import IntegrationStatus


class IIntegrationRegistry(ABC):
    """
    Interface for the integration registry.

    The registry is owned by the admin/configuration side of the
    application. The execution layer only reads integration records and
    writes connectivity status transitions back through this contract.
    """

    @abstractmethod
    def get_integration(self, integration_id: str) -> Optional[IntegrationRecord]:
        """
        Get an integration record by id.

        Args:
            integration_id: Integration identifier

        Returns:
            Integration record if found, None otherwise
        """
        pass

    @abstractmethod
    def get_credential_value(self, integration_id: str, key: str) -> Optional[str]:
        """
        Get a single credential value.

        Args:
            integration_id: Integration identifier
            key: Credential key (e.g. ``PAYSTACK_SECRET_KEY``)

        Returns:
            Credential value if set, None otherwise
        """
        pass

    @abstractmethod
    def update_status(
        self,
        integration_id: str,
        status: IntegrationStatus,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Record a connectivity status transition.

        Last writer wins. Unknown integration ids are ignored.

        Args:
            integration_id: Integration identifier
            status: New status
            error_message: Failure message (stored as ``last_error``)
        """
        pass


__all__ = ["IIntegrationRegistry"]
