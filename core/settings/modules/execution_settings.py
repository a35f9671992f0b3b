from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import MarketHubBaseSettings


class ExecutionSettings(MarketHubBaseSettings):
    """
    Defaults for the central API execution layer.
    Loaded from .env with exact variable name matching.
    """

    timeout_seconds: float = Field(default=30.0, gt=0, alias="API_EXECUTION_TIMEOUT_SECONDS")
    max_retries: int = Field(default=3, ge=0, alias="API_EXECUTION_MAX_RETRIES")
    retry_delay_seconds: float = Field(
        default=1.0, ge=0, alias="API_EXECUTION_RETRY_DELAY_SECONDS"
    )
    ledger_capacity: int = Field(default=1000, gt=0, alias="API_CALL_LEDGER_CAPACITY")
    health_check_timeout_seconds: float = Field(
        default=10.0, gt=0, alias="API_HEALTH_CHECK_TIMEOUT_SECONDS"
    )
