"""
QR code rendering with the qrcode library.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

import qrcode
import qrcode.constants
import qrcode.image.pil
import qrcode.image.svg
from PIL import Image
from qrcode.exceptions import DataOverflowError

from qrhandshake.common import Configurable
from qrhandshake.common.config import Config
from qrhandshake.common.exceptions import EncodingFailure

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

IMAGE_FORMATS = ("png", "svg")


class QrCodeRenderer(Configurable):
    """Renders payload text as a PNG or SVG QR code of a given size."""

    def __init__(self, image_format: str = "png", **overrides: Any) -> None:
        self.config = Config()
        self.apply_overrides(overrides, self.config, ["error_correction", "qr_border"])
        self.error_correction = self.error_correction.upper()
        if self.error_correction not in ERROR_CORRECTION_LEVELS:
            msg = f"Unknown error-correction level {self.error_correction!r}"
            raise ValueError(msg)
        if image_format not in IMAGE_FORMATS:
            msg = f"Unsupported image format {image_format!r}"
            raise ValueError(msg)
        self.image_format = image_format

    def render(self, payload: str, width: int, height: int) -> bytes:
        """Render ``payload`` to image bytes no larger than width x height."""
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECTION_LEVELS[self.error_correction],
            border=self.qr_border,
        )
        qr.add_data(payload)
        try:
            qr.make(fit=True)
        except DataOverflowError as err:
            msg = (
                f"Payload of {len(payload)} characters does not fit a QR code at "
                f"error-correction level {self.error_correction}"
            )
            raise EncodingFailure(msg, payload_len=len(payload)) from err

        modules = qr.modules_count + 2 * self.qr_border
        box_size = min(width, height) // modules
        if box_size < 1:
            msg = (
                f"A version {qr.version} QR code needs at least {modules}x{modules} "
                f"pixels, got {width}x{height}"
            )
            raise EncodingFailure(msg, payload_len=len(payload))
        qr.box_size = box_size
        logger.debug(
            "Rendering version %d QR code, %d px per module", qr.version, box_size
        )

        if self.image_format == "svg":
            return self._render_svg(qr, width, height)
        return self._render_png(qr, width, height)

    @staticmethod
    def _render_png(qr: qrcode.QRCode, width: int, height: int) -> bytes:
        symbol = qr.make_image(
            image_factory=qrcode.image.pil.PilImage,
            fill_color="black",
            back_color="white",
        ).get_image()
        canvas = Image.new("RGB", (width, height), "white")
        canvas.paste(
            symbol,
            ((width - symbol.size[0]) // 2, (height - symbol.size[1]) // 2),
        )
        buf = BytesIO()
        canvas.save(buf, format="PNG")
        return buf.getvalue()

    @staticmethod
    def _render_svg(qr: qrcode.QRCode, width: int, height: int) -> bytes:
        img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
        svg = img.get_image()
        svg.set("width", str(width))
        svg.set("height", str(height))
        return img.to_string()
