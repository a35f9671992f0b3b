"""
Credential format checks.

Cheap, offline sanity checks of an integration's credentials. They catch
the common paste mistakes (test key in live mode, truncated PEM, ...)
without talking to the provider.
"""
from typing import Callable, Optional

from core.domain.entities import IntegrationRecord
from core.domain.enums import IntegrationEnvironment

CredentialCheck = Callable[[IntegrationRecord], Optional[str]]


def _check_google_oauth(record: IntegrationRecord) -> Optional[str]:
    client_id = record.credential_value("GOOGLE_OAUTH_CLIENT_ID") or ""
    if not client_id.endswith(".apps.googleusercontent.com"):
        return "Invalid Client ID format. Should end with .apps.googleusercontent.com"
    return None


def _check_google_maps(record: IntegrationRecord) -> Optional[str]:
    api_key = record.credential_value("GOOGLE_MAPS_API_KEY") or ""
    if not api_key.startswith("AIza"):
        return "Invalid API Key format. Google Maps API keys start with AIza"
    return None


def _check_paystack(record: IntegrationRecord) -> Optional[str]:
    public_key = record.credential_value("PAYSTACK_PUBLIC_KEY") or ""
    secret_key = record.credential_value("PAYSTACK_SECRET_KEY") or ""
    if record.environment == IntegrationEnvironment.DEMO:
        if not (public_key.startswith("pk_test_") and secret_key.startswith("sk_test_")):
            return "Demo mode requires test keys (pk_test_* and sk_test_*)"
    elif not (public_key.startswith("pk_live_") and secret_key.startswith("sk_live_")):
        return "Live mode requires live keys (pk_live_* and sk_live_*)"
    return None


def _check_arkesel(record: IntegrationRecord) -> Optional[str]:
    sender_id = record.credential_value("ARKESEL_SENDER_ID") or ""
    if len(sender_id) > 11:
        return "Sender ID must be 11 characters or less"
    return None


def _check_gcs(record: IntegrationRecord) -> Optional[str]:
    private_key = record.credential_value("GCS_PRIVATE_KEY") or ""
    if "BEGIN PRIVATE KEY" not in private_key:
        return "Invalid private key format. Must be a valid PEM-encoded private key"
    return None


def _check_openai(record: IntegrationRecord) -> Optional[str]:
    api_key = record.credential_value("OPENAI_API_KEY") or ""
    if not api_key.startswith("sk-"):
        return "Invalid API key format. OpenAI API keys start with sk-"
    return None


def _check_veriff(record: IntegrationRecord) -> Optional[str]:
    if not (record.credential_value("VERIFF_API_KEY") and record.credential_value("VERIFF_API_SECRET")):
        return "Both API Key and API Secret are required"
    return None


CREDENTIAL_CHECKS: dict[str, CredentialCheck] = {
    "google_oauth": _check_google_oauth,
    "google_maps": _check_google_maps,
    "paystack": _check_paystack,
    "arkesel_otp": _check_arkesel,
    "google_cloud_storage": _check_gcs,
    "openai": _check_openai,
    "facial_recognition": _check_veriff,
}


def check_credentials(record: IntegrationRecord) -> Optional[str]:
    """
    Validate the credential formats of an integration.

    Args:
        record: Integration to check

    Returns:
        Problem description, or None when the credentials look valid
        (integrations without a known check always pass)
    """
    check = CREDENTIAL_CHECKS.get(record.id)
    if check is None:
        return None
    return check(record)
