from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.domain.enums import IntegrationEnvironment
from core.settings.base_settings import MarketHubBaseSettings


class IntegrationCredentialsSettings(MarketHubBaseSettings):
    """
    Credentials and enablement used to seed the integration registry.
    Loaded from .env with exact variable name matching.

    Every credential is optional: an integration whose required credentials
    are missing is simply registered as not configured.
    """

    enabled_integrations: str = Field(default="", alias="MARKETHUB_ENABLED_INTEGRATIONS")
    environment: Optional[IntegrationEnvironment] = Field(
        default=None, alias="MARKETHUB_INTEGRATION_ENVIRONMENT"
    )

    # Google OAuth
    google_oauth_client_id: Optional[str] = Field(default=None, alias="GOOGLE_OAUTH_CLIENT_ID")
    google_oauth_client_secret: Optional[str] = Field(
        default=None, alias="GOOGLE_OAUTH_CLIENT_SECRET"
    )
    google_oauth_redirect_uri: Optional[str] = Field(
        default=None, alias="GOOGLE_OAUTH_REDIRECT_URI"
    )

    # Google Maps
    google_maps_api_key: Optional[str] = Field(default=None, alias="GOOGLE_MAPS_API_KEY")

    # Paystack
    paystack_public_key: Optional[str] = Field(default=None, alias="PAYSTACK_PUBLIC_KEY")
    paystack_secret_key: Optional[str] = Field(default=None, alias="PAYSTACK_SECRET_KEY")
    paystack_webhook_secret: Optional[str] = Field(default=None, alias="PAYSTACK_WEBHOOK_SECRET")

    # Arkesel OTP
    arkesel_api_key: Optional[str] = Field(default=None, alias="ARKESEL_API_KEY")
    arkesel_sender_id: Optional[str] = Field(default=None, alias="ARKESEL_SENDER_ID")

    # Google Cloud Storage
    gcs_service_account_email: Optional[str] = Field(
        default=None, alias="GCS_SERVICE_ACCOUNT_EMAIL"
    )
    gcs_project_id: Optional[str] = Field(default=None, alias="GCS_PROJECT_ID")
    gcs_bucket_name: Optional[str] = Field(default=None, alias="GCS_BUCKET_NAME")
    gcs_private_key: Optional[str] = Field(default=None, alias="GCS_PRIVATE_KEY")

    # OpenAI
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_org_id: Optional[str] = Field(default=None, alias="OPENAI_ORG_ID")

    # Veriff (facial recognition)
    veriff_api_key: Optional[str] = Field(default=None, alias="VERIFF_API_KEY")
    veriff_api_secret: Optional[str] = Field(default=None, alias="VERIFF_API_SECRET")
    veriff_webhook_secret: Optional[str] = Field(default=None, alias="VERIFF_WEBHOOK_SECRET")

    @property
    def enabled_ids(self) -> set[str]:
        return {
            part.strip()
            for part in self.enabled_integrations.split(",")
            if part.strip()
        }

    def credential_values(self) -> dict[str, str]:
        """Return ``{ENV_KEY: value}`` for every credential that is set."""
        values = self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={"enabled_integrations", "environment"},
        )
        return {key: str(value) for key, value in values.items()}
