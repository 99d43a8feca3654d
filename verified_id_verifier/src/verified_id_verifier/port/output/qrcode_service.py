"""QR code service port - Interface for rendering presentation request URLs as QR codes"""

from abc import ABC, abstractmethod
from enum import Enum

from returns.result import Result


class QrCodeFormat(str, Enum):
    """QR code image format"""

    PNG = "png"
    SVG = "svg"
    JPEG = "jpeg"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_MEDIA_TYPES = {
    QrCodeFormat.PNG: "image/png",
    QrCodeFormat.SVG: "image/svg+xml",
    QrCodeFormat.JPEG: "image/jpeg",
}


class QrCodeError(Exception):
    """Error during QR code generation"""

    pass


class QrCodeService(ABC):
    """Renders the presentation request URL the holder scans with the wallet"""

    @abstractmethod
    async def generate_request_qr(
        self, request_url: str, format: QrCodeFormat = QrCodeFormat.PNG, size: int = 400
    ) -> Result[bytes, QrCodeError]:
        """
        Render a presentation request URL (openid-vc://...) as a QR image.

        Args:
            request_url: URL returned by the request service
            format: Image format (PNG, SVG, JPEG)
            size: Edge length in pixels for raster formats

        Returns:
            Success(image bytes) or Failure(QrCodeError)
        """
        pass
