"""Verified ID request service client using httpx"""

import logging
from typing import Any, Dict

import httpx
from returns.result import Failure, Result, Success

from verified_id_verifier.port.output import VerificationApiError, VerificationClient

logger = logging.getLogger(__name__)


class VerifiedIdClient(VerificationClient):
    """
    VerificationClient calling the Microsoft Entra Verified ID request service.

    A single POST per call; failures are reported, never retried.
    """

    def __init__(self, endpoint: str, http_client: httpx.AsyncClient, timeout: float = 15.0):
        self.endpoint = endpoint
        self.http_client = http_client
        self.timeout = timeout

    async def create_presentation_request(
        self, payload: Dict[str, Any], access_token: str
    ) -> Result[Dict[str, Any], VerificationApiError]:
        """
        POST the presentation request.

        Returns:
            Success(response body) or Failure(VerificationApiError)
        """
        try:
            response = await self.http_client.post(
                self.endpoint,
                json=payload,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            return Failure(VerificationApiError(f"Request service unreachable: {e}"))

        if not response.is_success:
            return Failure(
                VerificationApiError(
                    f"Request service returned HTTP {response.status_code}: {_error_message(response)}",
                    status_code=response.status_code,
                )
            )

        try:
            body = response.json()
        except ValueError:
            return Failure(
                VerificationApiError("Request service returned a non-JSON body", status_code=response.status_code)
            )

        if not isinstance(body, dict):
            return Failure(
                VerificationApiError("Request service returned an unexpected body", status_code=response.status_code)
            )

        logger.info("Presentation request %s created", body.get("requestId", "<no requestId>"))
        return Success(body)


def _error_message(response: httpx.Response) -> str:
    """Best effort message from the request service error object ({error: {code, message}})"""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        inner = error.get("innererror") if isinstance(error.get("innererror"), dict) else {}
        return str(inner.get("message") or error.get("message") or error.get("code") or error)
    return str(body)
