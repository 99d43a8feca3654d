"""Dependency injection container for FastAPI"""

from datetime import timedelta
from typing import Optional

import httpx

from verified_id_verifier.adapter import (
    ClientCredentialsTokenProvider,
    InMemorySessionStore,
    QrCodeServiceImpl,
    VerifiedIdClient,
)
from verified_id_verifier.application import (
    CreatePresentationSessionImpl,
    GetSessionStatusImpl,
    IngestCallbackImpl,
)
from verified_id_verifier.config import load_or_create_config
from verified_id_verifier.domain import Clock, SystemClock, VerifierConfig
from verified_id_verifier.port.input import (
    CreatePresentationSession,
    GetSessionStatus,
    IngestCallback,
)
from verified_id_verifier.port.output import (
    QrCodeService,
    SessionStore,
    TokenProvider,
    VerificationClient,
)


class DependencyContainer:
    """
    Dependency injection container for the verifier application.

    Manages singleton instances of services and use cases. Any of the
    output adapters can be passed in to replace the default one (tests).
    """

    def __init__(
        self,
        config: Optional[VerifierConfig] = None,
        clock: Optional[Clock] = None,
        session_store: Optional[SessionStore] = None,
        token_provider: Optional[TokenProvider] = None,
        verification_client: Optional[VerificationClient] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize container with optional configuration and adapters.

        Args:
            config: Verifier configuration (if None, loaded from environment)
            clock: Clock (if None, system clock)
            session_store: Session store (if None, in-memory)
            token_provider: Token provider (if None, client credentials over HTTP)
            verification_client: Request service client (if None, Verified ID over HTTP)
            http_client: Shared HTTP client for the default adapters
        """
        self._config = config
        self._clock = clock
        self._session_store = session_store
        self._token_provider = token_provider
        self._verification_client = verification_client
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._qrcode_service: Optional[QrCodeService] = None
        self._create_presentation_session: Optional[CreatePresentationSession] = None
        self._ingest_callback: Optional[IngestCallback] = None
        self._get_session_status: Optional[GetSessionStatus] = None

    def get_config(self) -> VerifierConfig:
        """Get verifier configuration"""
        if self._config is None:
            self._config = load_or_create_config()
        return self._config

    def get_clock(self) -> Clock:
        """Get clock instance (singleton)"""
        if self._clock is None:
            self._clock = SystemClock()
        return self._clock

    def get_http_client(self) -> httpx.AsyncClient:
        """Get shared HTTP client (singleton)"""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    def get_session_store(self) -> SessionStore:
        """Get session store (singleton)"""
        if self._session_store is None:
            self._session_store = InMemorySessionStore(
                clock=self.get_clock(),
                max_age=timedelta(seconds=self.get_config().session_max_age_seconds),
            )
        return self._session_store

    def get_token_provider(self) -> TokenProvider:
        """Get token provider (singleton)"""
        if self._token_provider is None:
            config = self.get_config()
            self._token_provider = ClientCredentialsTokenProvider(
                config=config.token,
                http_client=self.get_http_client(),
                clock=self.get_clock(),
                timeout=config.http_timeout_seconds,
            )
        return self._token_provider

    def get_verification_client(self) -> VerificationClient:
        """Get request service client (singleton)"""
        if self._verification_client is None:
            config = self.get_config()
            self._verification_client = VerifiedIdClient(
                endpoint=config.request_endpoint,
                http_client=self.get_http_client(),
                timeout=config.http_timeout_seconds,
            )
        return self._verification_client

    def get_qrcode_service(self) -> QrCodeService:
        """Get QR code service (singleton)"""
        if self._qrcode_service is None:
            self._qrcode_service = QrCodeServiceImpl()
        return self._qrcode_service

    def get_create_presentation_session(self) -> CreatePresentationSession:
        """Get CreatePresentationSession use case (singleton)"""
        if self._create_presentation_session is None:
            self._create_presentation_session = CreatePresentationSessionImpl(
                store=self.get_session_store(),
                token_provider=self.get_token_provider(),
                verification_client=self.get_verification_client(),
                config=self.get_config(),
                clock=self.get_clock(),
            )
        return self._create_presentation_session

    def get_ingest_callback(self) -> IngestCallback:
        """Get IngestCallback use case (singleton)"""
        if self._ingest_callback is None:
            self._ingest_callback = IngestCallbackImpl(
                store=self.get_session_store(), config=self.get_config(), clock=self.get_clock()
            )
        return self._ingest_callback

    def get_get_session_status(self) -> GetSessionStatus:
        """Get GetSessionStatus use case (singleton)"""
        if self._get_session_status is None:
            self._get_session_status = GetSessionStatusImpl(store=self.get_session_store())
        return self._get_session_status

    async def aclose(self) -> None:
        """Release the HTTP client if the container created it"""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


# Global container instance
_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """Get or create global dependency container"""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def set_container(container: DependencyContainer) -> None:
    """Set global dependency container (useful for testing)"""
    global _container
    _container = container


# FastAPI dependency functions
def get_create_presentation_session_use_case() -> CreatePresentationSession:
    """FastAPI dependency for CreatePresentationSession use case"""
    return get_container().get_create_presentation_session()


def get_ingest_callback_use_case() -> IngestCallback:
    """FastAPI dependency for IngestCallback use case"""
    return get_container().get_ingest_callback()


def get_get_session_status_use_case() -> GetSessionStatus:
    """FastAPI dependency for GetSessionStatus use case"""
    return get_container().get_get_session_status()


def get_session_store() -> SessionStore:
    """FastAPI dependency for SessionStore"""
    return get_container().get_session_store()


def get_qrcode_service() -> QrCodeService:
    """FastAPI dependency for QrCodeService"""
    return get_container().get_qrcode_service()


def get_verifier_config() -> VerifierConfig:
    """FastAPI dependency for VerifierConfig"""
    return get_container().get_config()
