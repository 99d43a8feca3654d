"""Verifier configuration models

This module defines the configuration of the relying party:

- Credentials used to obtain an access token for the Verified ID request service
- The static presentation request template and the values merged into it
- Callback addressing and the shared secret the request service sends back
- Web session lifetime and outbound HTTP settings

All configuration is validated on construction.
"""

import copy
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_REQUEST_ENDPOINT = (
    "https://verifiedid.did.msidentity.com/v1.0/verifiableCredentials/createPresentationRequest"
)
DEFAULT_SCOPE = "3db474b9-6a0c-4840-96ac-1fceb342124f/.default"
DEFAULT_AUTHORITY_HOST = "https://login.microsoftonline.com"
CALLBACK_PATH = "/api/verifier/presentation-request-callback"
CALLBACK_API_KEY_HEADER = "api-key"


def default_presentation_template() -> Dict[str, Any]:
    """Template used when no PRESENTATION_REQUEST_TEMPLATE file is configured"""
    return {
        "includeQRCode": False,
        "includeReceipt": False,
        "authority": "",
        "registration": {"clientName": ""},
        "callback": {"url": "", "state": "", "headers": {CALLBACK_API_KEY_HEADER: ""}},
        "requestedCredentials": [
            {
                "type": "",
                "purpose": "",
                "acceptedIssuers": [],
                "configuration": {"validation": {"allowRevoked": False, "validateLinkedDomain": True}},
            }
        ],
    }


# ======================
# Token Provider Configuration
# ======================


class TokenProviderConfig(BaseModel):
    """
    OAuth 2.0 client credentials for the Verified ID request service.

    Either a client secret or a private JWK (for a private_key_jwt client
    assertion) must be provided. The assertion wins when both are set.

    Attributes:
        tenant_id: Entra tenant
        client_id: Application (client) id of the app registration
        client_secret: Client secret
        client_assertion_jwk: Private JWK used to sign client assertions
        client_assertion_algorithm: JWS algorithm for the client assertion
        scope: Scope requested for the access token
        authority_host: Token authority host
    """

    tenant_id: str = Field(..., description="Entra tenant id")
    client_id: str = Field(..., description="Application (client) id")
    client_secret: Optional[str] = Field(None, description="Client secret")
    client_assertion_jwk: Optional[Dict[str, Any]] = Field(None, description="Private JWK for private_key_jwt")
    client_assertion_algorithm: str = Field("RS256", description="Client assertion signing algorithm")
    scope: str = Field(DEFAULT_SCOPE, description="Requested scope")
    authority_host: str = Field(DEFAULT_AUTHORITY_HOST, description="Token authority host")

    @field_validator("tenant_id", "client_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("client_assertion_jwk")
    @classmethod
    def validate_assertion_jwk(cls, v: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Validate JWK has a key type"""
        if v is not None and "kty" not in v:
            raise ValueError("client_assertion_jwk must contain 'kty' field")
        return v

    @model_validator(mode="after")
    def validate_credential(self) -> "TokenProviderConfig":
        """Ensure there is something to authenticate the client with"""
        if not self.client_secret and not self.client_assertion_jwk:
            raise ValueError("Either 'client_secret' or 'client_assertion_jwk' must be provided")
        return self

    @property
    def token_endpoint(self) -> str:
        return f"{self.authority_host.rstrip('/')}/{self.tenant_id}/oauth2/v2.0/token"


# ======================
# Main Verifier Configuration
# ======================


class VerifierConfig(BaseModel):
    """
    Complete relying party configuration.

    Attributes:
        authority: DID of the verifier
        public_url: Public base URL the request service calls back to
        client_name: Name shown to the holder in the wallet
        credential_type: Type of the requested credential
        purpose: Purpose shown to the holder
        accepted_issuers: DIDs of issuers whose credentials are accepted
        callback_api_key: Shared secret the request service sends in the api-key header
        presentation_template: Static request template the per-session values are merged into
        request_endpoint: createPresentationRequest URL
        token: Access token credentials
        session_max_age_seconds: Lifetime of a web session
        session_cookie_name: Cookie carrying the web session id
        session_sweep_interval_seconds: How often expired sessions are purged
        http_timeout_seconds: Timeout for outbound HTTP calls
    """

    authority: str = Field(..., description="Verifier DID")
    public_url: str = Field(..., description="Public URL of the verifier")
    client_name: str = Field("Verified ID Verifier", description="Registration client name")
    credential_type: str = Field(..., description="Requested credential type")
    purpose: str = Field("", description="Purpose of the request")
    accepted_issuers: List[str] = Field(..., description="Accepted issuer DIDs")
    callback_api_key: Optional[str] = Field(None, description="Callback shared secret")
    presentation_template: Dict[str, Any] = Field(
        default_factory=default_presentation_template, description="Presentation request template"
    )
    request_endpoint: str = Field(DEFAULT_REQUEST_ENDPOINT, description="createPresentationRequest URL")
    token: TokenProviderConfig = Field(..., description="Access token credentials")
    session_max_age_seconds: int = Field(1800, ge=60, le=86400, description="Web session lifetime (seconds)")
    session_cookie_name: str = Field("vc_session", description="Session cookie name")
    session_sweep_interval_seconds: float = Field(60.0, gt=0, description="Expired session sweep interval")
    http_timeout_seconds: float = Field(15.0, gt=0, description="Outbound HTTP timeout")

    @field_validator("authority")
    @classmethod
    def validate_authority(cls, v: str) -> str:
        """Authority must be a DID"""
        if not v.startswith("did:"):
            raise ValueError("authority must be a DID (did:...)")
        return v

    @field_validator("public_url")
    @classmethod
    def validate_public_url(cls, v: str) -> str:
        """The request service only calls back over HTTPS"""
        if not v.startswith("https://") and not v.startswith("http://localhost"):
            raise ValueError("public_url must be HTTPS (or http://localhost for dev)")
        return v.rstrip("/")

    @field_validator("accepted_issuers")
    @classmethod
    def validate_accepted_issuers(cls, v: List[str]) -> List[str]:
        issuers = [issuer.strip() for issuer in v if issuer and issuer.strip()]
        if not issuers:
            raise ValueError("accepted_issuers must contain at least one issuer DID")
        return issuers

    @field_validator("presentation_template")
    @classmethod
    def validate_presentation_template(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Template must have somewhere to put the requested credential"""
        requested = v.get("requestedCredentials")
        if not isinstance(requested, list) or not requested or not isinstance(requested[0], dict):
            raise ValueError("presentation_template must contain a non-empty 'requestedCredentials' list")
        if "callback" in v and not isinstance(v["callback"], dict):
            raise ValueError("presentation_template 'callback' must be an object")
        if "registration" in v and not isinstance(v["registration"], dict):
            raise ValueError("presentation_template 'registration' must be an object")
        return copy.deepcopy(v)

    def get_callback_url(self) -> str:
        """URL the request service posts status callbacks to"""
        return f"{self.public_url}{CALLBACK_PATH}"
