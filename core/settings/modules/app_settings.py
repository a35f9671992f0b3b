from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.execution_settings import ExecutionSettings
from core.settings.modules.integrations_settings import IntegrationCredentialsSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    execution: ExecutionSettings
    integrations: IntegrationCredentialsSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        execution=ExecutionSettings(),
        integrations=IntegrationCredentialsSettings(),
    )
