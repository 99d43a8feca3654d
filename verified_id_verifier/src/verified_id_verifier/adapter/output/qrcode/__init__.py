"""QR code adapters"""

from verified_id_verifier.adapter.output.qrcode.qrcode_service_impl import QrCodeServiceImpl

__all__ = ["QrCodeServiceImpl"]
