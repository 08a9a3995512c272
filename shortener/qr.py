"""QR code rendering for short links."""

from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M


def generate_qr_png(data: str, box_size: int = 8, border: int = 1) -> bytes:
    """Render ``data`` as a PNG QR code.

    Args:
        data: Text to encode (the short link)
        box_size: Pixels per module
        border: Quiet-zone width in modules

    Returns:
        PNG image bytes
    """
    qr = qrcode.QRCode(
        version=None, box_size=box_size, border=border,
        error_correction=ERROR_CORRECT_M
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf)
    return buf.getvalue()
