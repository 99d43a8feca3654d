"""Verifier API endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response
from returns.result import Failure

from verified_id_verifier.api.dependencies import (
    get_create_presentation_session_use_case,
    get_get_session_status_use_case,
    get_ingest_callback_use_case,
    get_qrcode_service,
    get_session_store,
    get_verifier_config,
)
from verified_id_verifier.api.models import (
    CallbackRequestModel,
    ErrorResponseModel,
    StatusResponseModel,
)
from verified_id_verifier.api.session import attach_session_cookie, resolve_web_session
from verified_id_verifier.domain import CALLBACK_API_KEY_HEADER, VerifierConfig
from verified_id_verifier.port.input import (
    AuthError,
    CreatePresentationSession,
    CreatePresentationSessionRequest,
    GetSessionStatus,
    GetSessionStatusRequest,
    IngestCallback,
    IngestCallbackRequest,
)
from verified_id_verifier.port.output import QrCodeFormat, QrCodeService, SessionStore

logger = logging.getLogger(__name__)

REQUEST_URL_SCHEME = "openid-vc://"

router = APIRouter(prefix="/api/verifier", tags=["Verifier"])


@router.get(
    "/presentation-request",
    summary="Create presentation request",
    description="Create a presentation request bound to the caller's web session",
    responses={
        200: {"description": "Request service response with the session id added as 'id'"},
        401: {"model": ErrorResponseModel},
        502: {"model": ErrorResponseModel},
    },
)
async def create_presentation_request(
    request: Request,
    create_session_uc: CreatePresentationSession = Depends(get_create_presentation_session_use_case),
    store: SessionStore = Depends(get_session_store),
    config: VerifierConfig = Depends(get_verifier_config),
) -> JSONResponse:
    """
    Initiate a presentation for the current web session.

    The response carries everything the request service returned (url,
    qrCode, requestId, expiry) plus the session id the client polls with.
    """
    session_id = await resolve_web_session(request, store, config)

    result = await create_session_uc.execute(CreatePresentationSessionRequest(session_id=session_id))

    if isinstance(result, Failure):
        error = result.failure()
        if isinstance(error, AuthError):
            response = JSONResponse(
                status_code=401,
                content=ErrorResponseModel(
                    error="unauthorized",
                    error_description="Could not acquire credentials to access the request service",
                ).model_dump(exclude_none=True),
            )
        else:
            status_code = getattr(error, "status_code", None)
            details = {"status_code": status_code} if status_code is not None else None
            response = JSONResponse(
                status_code=502,
                content=ErrorResponseModel(
                    error="upstream_error",
                    error_description=str(error),
                    details=details,
                ).model_dump(exclude_none=True),
            )
    else:
        response = JSONResponse(status_code=200, content=result.unwrap().to_dict())

    attach_session_cookie(response, session_id, config)
    return response


@router.post(
    "/presentation-request-callback",
    summary="Receive status callback",
    description="Status callback from the request service. Always acknowledged with an empty 200.",
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": CallbackRequestModel.model_json_schema()}},
        }
    },
)
async def presentation_request_callback(
    request: Request,
    api_key: Optional[str] = Header(None, alias=CALLBACK_API_KEY_HEADER),
    ingest_callback_uc: IngestCallback = Depends(get_ingest_callback_use_case),
) -> Response:
    """
    Apply a status callback to the session named by its 'state'.

    Unknown sessions, malformed bodies and ignored statuses are logged and
    acknowledged the same way as applied ones so the sender does not retry.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Callback body is not valid JSON")
        body = None

    try:
        outcome = await ingest_callback_uc.execute(IngestCallbackRequest(body=body, api_key=api_key))
        logger.debug("Callback outcome: %s", outcome.outcome.value)
    except Exception:
        logger.exception("Unexpected error while ingesting callback")

    return Response(status_code=200)


@router.get(
    "/presentation-response",
    summary="Get presentation status",
    description="Poll the status of a presentation session",
    response_model=StatusResponseModel,
)
async def get_presentation_response(
    id: Optional[str] = Query(None, description="Session id returned by the presentation request endpoint"),
    get_status_uc: GetSessionStatus = Depends(get_get_session_status_use_case),
) -> JSONResponse:
    """
    Current status of a presentation session.

    Always succeeds; a missing or unknown id yields the 'unknown' status.
    """
    view = await get_status_uc.execute(GetSessionStatusRequest(session_id=id))
    # Unset fields are left out rather than sent as null
    return JSONResponse(content=view.to_dict())


@router.get(
    "/qrcode",
    summary="Get QR code",
    description="Render a presentation request URL as a QR code image",
    responses={
        200: {
            "content": {"image/png": {}, "image/svg+xml": {}, "image/jpeg": {}},
            "description": "QR code image",
        },
        400: {"model": ErrorResponseModel},
    },
)
async def get_qrcode(
    url: str = Query(..., description="Presentation request URL (openid-vc://...)"),
    format: str = Query("png", description="Image format: png, svg, jpeg"),
    qrcode_service: QrCodeService = Depends(get_qrcode_service),
) -> Response:
    """Render the URL from a presentation request response for wallets to scan"""
    if not url.startswith(REQUEST_URL_SCHEME):
        raise HTTPException(
            status_code=400,
            detail=ErrorResponseModel(
                error="invalid_request",
                error_description=f"url must start with {REQUEST_URL_SCHEME}",
            ).model_dump(exclude_none=True),
        )

    try:
        qr_format = QrCodeFormat(format.lower())
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponseModel(
                error="invalid_request", error_description=f"Invalid format: {format}"
            ).model_dump(exclude_none=True),
        )

    qr_result = await qrcode_service.generate_request_qr(request_url=url, format=qr_format)
    if isinstance(qr_result, Failure):
        raise HTTPException(status_code=500, detail="Failed to generate QR code")

    return Response(content=qr_result.unwrap(), media_type=qr_format.media_type)
