# Settings modules
from .app_settings import AppSettings, get_app_settings
from .execution_settings import ExecutionSettings
from .integrations_settings import IntegrationCredentialsSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "ExecutionSettings",
    "IntegrationCredentialsSettings",
]
