"""
QR code image rendering.

Encodes a public tipping URL as a PNG or SVG image suitable for printing
on table tents and staff badges.
"""

from io import BytesIO

import qrcode
import qrcode.image.svg

PNG = 'png'
SVG = 'svg'

IMAGE_FORMATS = {
    PNG: 'image/png',
    SVG: 'image/svg+xml',
}


def _build_qr(data: str) -> qrcode.QRCode:
    # Error correction M (15% recovery) survives smudged prints
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def render_qr_image(data: str, image_format: str = PNG) -> bytes:
    """
    Render ``data`` as a QR code image.

    Args:
        data: Text to encode, typically the tip URL.
        image_format: ``'png'`` or ``'svg'``.

    Returns:
        bytes: Encoded image content.

    Raises:
        ValueError: If image_format is not supported.
    """
    if image_format not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported QR image format: {image_format}")

    qr = _build_qr(data)
    if image_format == SVG:
        img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
    else:
        img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer)
    return buffer.getvalue()


def content_type_for(image_format: str) -> str:
    return IMAGE_FORMATS[image_format]
