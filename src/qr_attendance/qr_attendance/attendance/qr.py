from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image


def make_qr_png(data: str) -> io.BytesIO:
    """Render ``data`` as a PNG QR code, returned rewound and ready for send_file."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def decode_qr_image(stream: BinaryIO) -> Optional[str]:
    """Text of the first QR code found in the image, None when there is none."""
    # pyzbar loads the zbar shared library on import; keep it off the app start-up path.
    from pyzbar.pyzbar import decode as pyzbar_decode

    img = Image.open(stream).convert("RGB")
    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()
