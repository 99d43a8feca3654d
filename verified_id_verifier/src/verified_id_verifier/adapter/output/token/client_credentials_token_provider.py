"""OAuth 2.0 client credentials token provider using httpx and joserfc"""

import asyncio
import logging
import uuid
from datetime import timedelta
from typing import Any, Dict, Optional

import httpx
from joserfc import jwt
from joserfc.jwk import ECKey, OKPKey, RSAKey
from returns.result import Failure, Result, Success

from verified_id_verifier.domain import Clock, TokenProviderConfig
from verified_id_verifier.port.output import AccessToken, TokenAcquisitionError, TokenProvider

logger = logging.getLogger(__name__)

CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
CLIENT_ASSERTION_LIFETIME = timedelta(minutes=10)
# Tokens are renewed this long before they actually expire
EXPIRY_SKEW = timedelta(seconds=60)


class ClientCredentialsTokenProvider(TokenProvider):
    """
    TokenProvider for the Microsoft identity platform client credentials grant.

    Authenticates the app either with its client secret or with a signed
    private_key_jwt client assertion. Tokens are cached until shortly before
    they expire; concurrent callers share a single token request.
    """

    def __init__(
        self,
        config: TokenProviderConfig,
        http_client: httpx.AsyncClient,
        clock: Clock,
        timeout: float = 15.0,
    ):
        self.config = config
        self.http_client = http_client
        self.clock = clock
        self.timeout = timeout
        self._cached: Optional[AccessToken] = None
        self._lock = asyncio.Lock()

    async def acquire_token(self) -> Result[AccessToken, TokenAcquisitionError]:
        """
        Return a cached token or request a new one.

        Returns:
            Success(AccessToken) or Failure(TokenAcquisitionError)
        """
        async with self._lock:
            if self._cached is not None and self.clock.now() < self._cached.expires_at - EXPIRY_SKEW:
                return Success(self._cached)

            result = await self._request_token()
            if isinstance(result, Success):
                self._cached = result.unwrap()
            return result

    async def _request_token(self) -> Result[AccessToken, TokenAcquisitionError]:
        try:
            form = self._build_token_request()
        except Exception as e:
            return Failure(TokenAcquisitionError(f"Failed to build client assertion: {e}"))

        try:
            response = await self.http_client.post(self.config.token_endpoint, data=form, timeout=self.timeout)
        except httpx.HTTPError as e:
            return Failure(TokenAcquisitionError(f"Token endpoint unreachable: {e}"))

        if response.status_code != 200:
            return Failure(
                TokenAcquisitionError(
                    f"Token request failed with HTTP {response.status_code}: {_error_description(response)}"
                )
            )

        try:
            body = response.json()
        except ValueError:
            return Failure(TokenAcquisitionError("Token endpoint returned a non-JSON body"))

        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            return Failure(TokenAcquisitionError("Token response has no access_token"))

        try:
            expires_in = int(body.get("expires_in", 3600))
        except (TypeError, ValueError):
            expires_in = 3600

        logger.info("Acquired access token for client %s (expires in %ss)", self.config.client_id, expires_in)
        return Success(AccessToken(token=token, expires_at=self.clock.now() + timedelta(seconds=expires_in)))

    def _build_token_request(self) -> Dict[str, str]:
        form = {
            "grant_type": "client_credentials",
            "client_id": self.config.client_id,
            "scope": self.config.scope,
        }
        if self.config.client_assertion_jwk:
            form["client_assertion_type"] = CLIENT_ASSERTION_TYPE
            form["client_assertion"] = self._create_client_assertion()
        else:
            form["client_secret"] = self.config.client_secret or ""
        return form

    def _create_client_assertion(self) -> str:
        """
        Sign a client assertion JWT (RFC 7523).

        kid, x5t and x5t#S256 from the JWK are copied into the header so the
        identity platform can find the registered certificate.
        """
        jwk_dict = self.config.client_assertion_jwk or {}
        key = _load_key(jwk_dict)

        header: Dict[str, Any] = {"alg": self.config.client_assertion_algorithm, "typ": "JWT"}
        for name in ("kid", "x5t", "x5t#S256"):
            if jwk_dict.get(name):
                header[name] = jwk_dict[name]

        now = self.clock.now()
        claims = {
            "aud": self.config.token_endpoint,
            "iss": self.config.client_id,
            "sub": self.config.client_id,
            "jti": str(uuid.uuid4()),
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + CLIENT_ASSERTION_LIFETIME).timestamp()),
        }
        token = jwt.encode(header, claims, key)
        return token.decode("utf-8") if isinstance(token, bytes) else token


def _load_key(jwk_dict: Dict[str, Any]):
    kty = jwk_dict.get("kty")
    if kty == "EC":
        return ECKey.import_key(jwk_dict)
    elif kty == "RSA":
        return RSAKey.import_key(jwk_dict)
    elif kty == "OKP":
        return OKPKey.import_key(jwk_dict)
    raise ValueError(f"Unsupported key type: {kty}")


def _error_description(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("error_description") or body.get("error") or body)
    return str(body)
