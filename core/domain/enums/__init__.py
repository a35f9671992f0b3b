"""Domain enums."""

from .call_status import CallStatus
from .integration_status import (
    IntegrationCategory,
    IntegrationEnvironment,
    IntegrationStatus,
)

__all__ = [
    "CallStatus",
    "IntegrationCategory",
    "IntegrationEnvironment",
    "IntegrationStatus",
]
