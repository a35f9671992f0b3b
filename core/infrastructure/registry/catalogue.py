"""
Default integration catalogue.

Every external integration the marketplace knows about, in its
factory-fresh state: disabled, not configured, no credential values.
"""
from core.domain.entities import IntegrationCredential, IntegrationRecord
from core.domain.enums import IntegrationCategory, IntegrationEnvironment


def _cred(key: str, label: str, required: bool = True, secret: bool = False) -> IntegrationCredential:
    return IntegrationCredential(key=key, label=label, required=required, secret=secret)


def default_integrations() -> list[IntegrationRecord]:
    """Build a fresh copy of the default catalogue."""
    return [
        IntegrationRecord(
            id="google_oauth",
            name="Google OAuth",
            provider="Google",
            category=IntegrationCategory.AUTH,
            environment=IntegrationEnvironment.DEMO,
            credentials=(
                _cred("GOOGLE_OAUTH_CLIENT_ID", "Client ID"),
                _cred("GOOGLE_OAUTH_CLIENT_SECRET", "Client Secret", secret=True),
                _cred("GOOGLE_OAUTH_REDIRECT_URI", "Redirect URI"),
            ),
        ),
        IntegrationRecord(
            id="google_maps",
            name="Google Maps",
            provider="Google",
            category=IntegrationCategory.MAPS,
            environment=IntegrationEnvironment.LIVE,
            credentials=(_cred("GOOGLE_MAPS_API_KEY", "API Key", secret=True),),
        ),
        IntegrationRecord(
            id="paystack",
            name="Paystack Payments",
            provider="Paystack",
            category=IntegrationCategory.PAYMENT,
            environment=IntegrationEnvironment.DEMO,
            credentials=(
                _cred("PAYSTACK_PUBLIC_KEY", "Public Key"),
                _cred("PAYSTACK_SECRET_KEY", "Secret Key", secret=True),
                _cred("PAYSTACK_WEBHOOK_SECRET", "Webhook Secret", required=False, secret=True),
            ),
        ),
        IntegrationRecord(
            id="arkesel_otp",
            name="Arkesel OTP",
            provider="Arkesel",
            category=IntegrationCategory.OTP,
            environment=IntegrationEnvironment.DEMO,
            credentials=(
                _cred("ARKESEL_API_KEY", "API Key", secret=True),
                _cred("ARKESEL_SENDER_ID", "Sender ID"),
            ),
        ),
        IntegrationRecord(
            id="google_cloud_storage",
            name="Google Cloud Storage",
            provider="Google Cloud",
            category=IntegrationCategory.STORAGE,
            environment=IntegrationEnvironment.LIVE,
            credentials=(
                _cred("GCS_SERVICE_ACCOUNT_EMAIL", "Service Account Email"),
                _cred("GCS_PROJECT_ID", "Project ID"),
                _cred("GCS_BUCKET_NAME", "Bucket Name"),
                _cred("GCS_PRIVATE_KEY", "Private Key", secret=True),
            ),
        ),
        IntegrationRecord(
            id="openai",
            name="OpenAI",
            provider="OpenAI",
            category=IntegrationCategory.AI,
            environment=IntegrationEnvironment.LIVE,
            credentials=(
                _cred("OPENAI_API_KEY", "API Key", secret=True),
                _cred("OPENAI_ORG_ID", "Organization ID", required=False),
            ),
        ),
        IntegrationRecord(
            id="facial_recognition",
            name="Facial Recognition (Veriff)",
            provider="Veriff",
            category=IntegrationCategory.VERIFICATION,
            environment=IntegrationEnvironment.DEMO,
            credentials=(
                _cred("VERIFF_API_KEY", "API Key", secret=True),
                _cred("VERIFF_API_SECRET", "API Secret", secret=True),
                _cred("VERIFF_WEBHOOK_SECRET", "Webhook Secret", required=False, secret=True),
            ),
        ),
    ]
