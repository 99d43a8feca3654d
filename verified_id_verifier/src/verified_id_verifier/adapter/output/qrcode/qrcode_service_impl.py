"""QR code service implementation using qrcode library"""

import io

import qrcode
import qrcode.image.svg
from PIL import Image
from returns.result import Failure, Result, Success

from verified_id_verifier.port.output import QrCodeError, QrCodeFormat, QrCodeService


class QrCodeServiceImpl(QrCodeService):
    """
    Implementation of QrCodeService using the qrcode library.

    Request URLs are encoded with high error correction so the code stays
    scannable from a phone pointed at a screen.
    """

    async def generate_request_qr(
        self, request_url: str, format: QrCodeFormat = QrCodeFormat.PNG, size: int = 400
    ) -> Result[bytes, QrCodeError]:
        """
        Render a presentation request URL as a QR image.

        Returns:
            Success(image bytes) or Failure(QrCodeError)
        """
        if not request_url:
            return Failure(QrCodeError("Nothing to encode"))

        try:
            qr = qrcode.QRCode(
                version=None,  # smallest version that fits
                error_correction=qrcode.constants.ERROR_CORRECT_H,
                box_size=10,
                border=4,
            )
            qr.add_data(request_url)
            qr.make(fit=True)

            buffer = io.BytesIO()

            if format == QrCodeFormat.SVG:
                img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
                img.save(buffer)
                return Success(buffer.getvalue())

            img = qr.make_image(fill_color="black", back_color="white").get_image()
            img = img.convert("RGB").resize((size, size), Image.Resampling.NEAREST)

            if format == QrCodeFormat.PNG:
                img.save(buffer, format="PNG")
            elif format == QrCodeFormat.JPEG:
                img.save(buffer, format="JPEG", quality=95)
            else:
                return Failure(QrCodeError(f"Unsupported format: {format}"))

            return Success(buffer.getvalue())

        except Exception as e:
            return Failure(QrCodeError(f"Failed to generate QR code: {e}"))
