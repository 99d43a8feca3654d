"""Tests for the Verified ID request service client"""

import asyncio
import json

import httpx
from returns.result import Failure

from verified_id_verifier.adapter import VerifiedIdClient
from verified_id_verifier.domain import DEFAULT_REQUEST_ENDPOINT
from verified_id_verifier.port.output import VerificationApiError


def _client(handler) -> VerifiedIdClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VerifiedIdClient(endpoint=DEFAULT_REQUEST_ENDPOINT, http_client=http_client)


def test_posts_payload_with_bearer_token() -> None:
    seen: list[httpx.Request] = []
    response_body = {
        "requestId": "799f23ea-5241-45af-99ad-cf8e5018814e",
        "url": "openid-vc://?request_uri=https://verifiedid.did.msidentity.com/v1.0/tenants/t/verifiableCredentials/presentationRequests/799f",
        "expiry": 1633017751,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=response_body)

    result = asyncio.run(_client(handler).create_presentation_request({"authority": "did:web:v"}, "at-1"))

    assert result.unwrap() == response_body
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == DEFAULT_REQUEST_ENDPOINT
    assert request.headers["Authorization"] == "Bearer at-1"
    assert json.loads(request.content.decode()) == {"authority": "did:web:v"}


def test_error_object_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "requestId": "r",
                "error": {
                    "code": "badRequest",
                    "message": "The request is invalid.",
                    "innererror": {"code": "badOrMissingField", "message": "authority: invalid DID"},
                },
            },
        )

    result = asyncio.run(_client(handler).create_presentation_request({}, "at"))

    assert isinstance(result, Failure)
    error = result.failure()
    assert isinstance(error, VerificationApiError)
    assert error.status_code == 400
    assert "authority: invalid DID" in str(error)


def test_error_without_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    error = asyncio.run(_client(handler).create_presentation_request({}, "at")).failure()

    assert error.status_code == 503
    assert "HTTP 503" in str(error)


def test_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    error = asyncio.run(_client(handler).create_presentation_request({}, "at")).failure()

    assert error.status_code is None
    assert "unreachable" in str(error)


def test_non_json_success_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html></html>")

    error = asyncio.run(_client(handler).create_presentation_request({}, "at")).failure()

    assert "non-JSON" in str(error)


def test_unexpected_body_shape() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "an", "object"])

    error = asyncio.run(_client(handler).create_presentation_request({}, "at")).failure()

    assert "unexpected body" in str(error)
