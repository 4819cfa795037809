from __future__ import annotations

import base64
import io

import qrcode


def make_qr_png(payload: str) -> bytes:
    """Render `payload` as a QR code PNG (the image printed on ID cards)."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def make_qr_data_url(payload: str) -> str:
    encoded = base64.b64encode(make_qr_png(payload)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
