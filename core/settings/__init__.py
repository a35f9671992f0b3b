# Settings package
from core.settings.modules import (
    AppSettings,
    ExecutionSettings,
    IntegrationCredentialsSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "ExecutionSettings",
    "IntegrationCredentialsSettings",
]
