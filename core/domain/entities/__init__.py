"""Domain entities."""

from .integration import IntegrationCredential, IntegrationRecord

__all__ = ["IntegrationCredential", "IntegrationRecord"]
