"""Domain layer - pure domain models and interfaces."""

from .entities import IntegrationCredential, IntegrationRecord
from .enums import (
    CallStatus,
    IntegrationCategory,
    IntegrationEnvironment,
    IntegrationStatus,
)

__all__ = [
    "CallStatus",
    "IntegrationCategory",
    "IntegrationCredential",
    "IntegrationEnvironment",
    "IntegrationRecord",
    "IntegrationStatus",
]
