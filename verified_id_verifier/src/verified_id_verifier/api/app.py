"""FastAPI application for the Verified ID verifier"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from returns.result import Failure

from verified_id_verifier.api.dependencies import get_container
from verified_id_verifier.api.routes import verifier
from verified_id_verifier.app_logging import configure_logging
from verified_id_verifier.port.output import SessionStore

logger = logging.getLogger(__name__)


async def sweep_expired_sessions(store: SessionStore, interval_seconds: float) -> None:
    """Purge expired web sessions every interval until cancelled"""
    while True:
        await asyncio.sleep(interval_seconds)
        result = await store.purge_expired()
        if isinstance(result, Failure):
            logger.error("Session sweep failed: %s", result.failure())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging()
    logger.info("Starting Verified ID verifier API...")

    # Reuses a container installed beforehand (tests)
    container = get_container()
    config = container.get_config()
    sweeper = asyncio.create_task(
        sweep_expired_sessions(container.get_session_store(), config.session_sweep_interval_seconds)
    )

    logger.info("Verifier API ready, callbacks expected at %s", config.get_callback_url())

    yield

    logger.info("Shutting down Verified ID verifier API...")
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await container.aclose()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Verified ID Verifier",
        description="""
        Relying-party backend for Microsoft Entra Verified ID presentations

        Creates presentation requests on the request service, ingests its
        status callbacks and exposes the per-session status for polling.

        ## Architecture

        This implementation follows hexagonal (ports and adapters) architecture:
        - **Domain Layer**: Presentation session state machine, request builder, configuration
        - **Application Layer**: Use cases orchestrating domain and infrastructure
        - **Port Layer**: Interfaces defining contracts
        - **Adapter Layer**: Session store, token provider, request service client, QR codes
        - **API Layer**: FastAPI endpoints exposing use cases

        ## Endpoints

        - `GET /api/verifier/presentation-request` - Create presentation request
        - `POST /api/verifier/presentation-request-callback` - Request service callback
        - `GET /api/verifier/presentation-response?id=...` - Poll presentation status
        - `GET /api/verifier/qrcode?url=...` - Render request URL as QR code
        """,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(verifier.router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        count = await get_container().get_session_store().count()
        return JSONResponse(
            content={
                "status": "healthy",
                "service": "verified-id-verifier",
                "sessions": count.value_or(None),
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
