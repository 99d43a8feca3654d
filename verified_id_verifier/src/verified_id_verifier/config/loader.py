"""Configuration loader for the Verified ID verifier"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from verified_id_verifier.domain import (
    DEFAULT_REQUEST_ENDPOINT,
    DEFAULT_SCOPE,
    TokenProviderConfig,
    VerifierConfig,
    default_presentation_template,
)

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = (
    "VERIFIER_AUTHORITY",
    "VERIFIER_BASE_URL",
    "VC_APP_TENANT_ID",
    "VC_APP_CLIENT_ID",
    "PRESENTATION_REQUEST_TYPE",
    "PRESENTATION_REQUEST_ACCEPTED_ISSUERS",
)


def load_config_from_env() -> VerifierConfig | None:
    """
    Load verifier configuration from environment variables.

    Environment variables:
    - VERIFIER_AUTHORITY: DID of the verifier
    - VERIFIER_BASE_URL: Public base URL the request service calls back to
    - VC_APP_TENANT_ID, VC_APP_CLIENT_ID: Entra app registration
    - VC_APP_CLIENT_SECRET: Client secret, or
    - VC_APP_CLIENT_ASSERTION_KEY: Path to a private JWK for private_key_jwt
    - VC_APP_CLIENT_ASSERTION_ALGORITHM: Client assertion algorithm (default: RS256)
    - VC_APP_SCOPE: Access token scope
    - VC_APP_AUTHORITY_HOST: Token authority host
    - PRESENTATION_REQUEST_TEMPLATE: Path to a JSON presentation request template
    - PRESENTATION_REGISTRATION_CLIENT_NAME: Name shown in the wallet
    - PRESENTATION_REQUEST_TYPE: Requested credential type
    - PRESENTATION_REQUEST_PURPOSE: Purpose shown in the wallet
    - PRESENTATION_REQUEST_ACCEPTED_ISSUERS: Comma-separated issuer DIDs
    - PRESENTATION_REQUEST_CALLBACK_API_KEY: Callback shared secret
    - VERIFIED_ID_REQUEST_ENDPOINT: createPresentationRequest URL
    - SESSION_MAX_AGE_SECONDS, SESSION_COOKIE_NAME: Web session settings
    - HTTP_TIMEOUT_SECONDS: Outbound HTTP timeout

    Returns:
        VerifierConfig if environment is properly configured, None otherwise

    Raises:
        FileNotFoundError: If a referenced template or key file does not exist
    """
    if not all(os.getenv(name) for name in REQUIRED_VARIABLES):
        return None

    client_secret = os.getenv("VC_APP_CLIENT_SECRET")
    assertion_key_path = os.getenv("VC_APP_CLIENT_ASSERTION_KEY")
    if not client_secret and not assertion_key_path:
        return None

    token_config = TokenProviderConfig(
        tenant_id=os.environ["VC_APP_TENANT_ID"],
        client_id=os.environ["VC_APP_CLIENT_ID"],
        client_secret=client_secret,
        client_assertion_jwk=_load_json_file(assertion_key_path, "Client assertion key") if assertion_key_path else None,
        client_assertion_algorithm=os.getenv("VC_APP_CLIENT_ASSERTION_ALGORITHM", "RS256"),
        scope=os.getenv("VC_APP_SCOPE", DEFAULT_SCOPE),
        authority_host=os.getenv("VC_APP_AUTHORITY_HOST", "https://login.microsoftonline.com"),
    )

    template_path = os.getenv("PRESENTATION_REQUEST_TEMPLATE")
    template = (
        _load_json_file(template_path, "Presentation request template")
        if template_path
        else default_presentation_template()
    )

    settings: Dict[str, Any] = {
        "authority": os.environ["VERIFIER_AUTHORITY"],
        "public_url": os.environ["VERIFIER_BASE_URL"],
        "credential_type": os.environ["PRESENTATION_REQUEST_TYPE"],
        "purpose": os.getenv("PRESENTATION_REQUEST_PURPOSE", ""),
        "accepted_issuers": os.environ["PRESENTATION_REQUEST_ACCEPTED_ISSUERS"].split(","),
        "callback_api_key": os.getenv("PRESENTATION_REQUEST_CALLBACK_API_KEY") or None,
        "presentation_template": template,
        "request_endpoint": os.getenv("VERIFIED_ID_REQUEST_ENDPOINT", DEFAULT_REQUEST_ENDPOINT),
        "token": token_config,
    }
    optional = {
        "client_name": "PRESENTATION_REGISTRATION_CLIENT_NAME",
        "session_max_age_seconds": "SESSION_MAX_AGE_SECONDS",
        "session_cookie_name": "SESSION_COOKIE_NAME",
        "http_timeout_seconds": "HTTP_TIMEOUT_SECONDS",
    }
    for field, variable in optional.items():
        value = os.getenv(variable)
        if value:
            settings[field] = value

    return VerifierConfig(**settings)


def create_test_config() -> VerifierConfig:
    """
    Create a configuration for tests and local development.

    Nothing in it points at a real tenant; outbound calls will fail unless the
    token provider and verification client are replaced.

    Returns:
        VerifierConfig with test settings
    """
    token_config = TokenProviderConfig(
        tenant_id="00000000-0000-0000-0000-000000000000",
        client_id="11111111-1111-1111-1111-111111111111",
        client_secret="test-client-secret",
    )

    return VerifierConfig(
        authority="did:web:verifier.example.com",
        public_url="http://localhost:8000",
        client_name="Test Verifier",
        credential_type="VerifiedEmployee",
        purpose="To check that you work here",
        accepted_issuers=["did:web:issuer.example.com"],
        callback_api_key="test-callback-api-key",
        token=token_config,
    )


def load_or_create_config() -> VerifierConfig:
    """
    Load configuration from environment or create test config.

    Returns:
        VerifierConfig
    """
    config = load_config_from_env()
    if config is None:
        logger.warning("No environment configuration found, using test config")
        config = create_test_config()
    else:
        logger.info("Loaded configuration from environment")

    return config


def _load_json_file(path: Optional[str], what: str) -> Dict[str, Any]:
    file = Path(path or "")
    if not file.is_file():
        raise FileNotFoundError(f"{what} not found: {path}")

    with open(file, "r") as f:
        return json.load(f)
