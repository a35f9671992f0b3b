"""
Integration Enums.

Connectivity, environment and category values for external integrations.
"""
from enum import Enum


class IntegrationStatus(str, Enum):
    """Last known connectivity status of an integration."""

    NOT_CONFIGURED = "not_configured"
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    ERROR = "error"


class IntegrationEnvironment(str, Enum):
    """Provider environment an integration talks to."""

    DEMO = "demo"
    LIVE = "live"


class IntegrationCategory(str, Enum):
    """Functional area served by an integration."""

    AUTH = "auth"
    MAPS = "maps"
    PAYMENT = "payment"
    OTP = "otp"
    STORAGE = "storage"
    AI = "ai"
    VERIFICATION = "verification"
