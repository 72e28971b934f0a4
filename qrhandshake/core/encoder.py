"""
Public key to QR payload encoding.

The payload is standard Base64 (RFC 4648 alphabet, ``=`` padded, no line
breaks) of the SubjectPublicKeyInfo DER bytes. PayloadDecoder accepts
exactly this form and nothing else.
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING

from qrhandshake.common.config import Config
from qrhandshake.common.exceptions import EncodingFailure

if TYPE_CHECKING:
    from qrhandshake.common.models import PublicKeyMaterial
    from qrhandshake.core.keypair import KeyPair

logger = logging.getLogger(__name__)


class PayloadEncoder:
    """Turns the public half of a keypair into QR-ready text."""

    def __init__(self, error_correction: str | None = None) -> None:
        config = Config()
        self.error_correction = (error_correction or config.ERROR_CORRECTION).upper()
        self.capacity = config.payload_capacity(self.error_correction)

    @staticmethod
    def encode_material(material: PublicKeyMaterial) -> str:
        return base64.b64encode(material.der).decode("ascii")

    def encode(self, key_pair: KeyPair) -> str:
        """Encode the public key of ``key_pair``. Never fails for a valid pair."""
        return self.encode_material(key_pair.public_material)

    def check_capacity(self, payload: str) -> None:
        """Raise EncodingFailure if ``payload`` cannot fit one QR symbol."""
        if len(payload) > self.capacity:
            msg = (
                f"Payload of {len(payload)} characters exceeds the QR capacity of "
                f"{self.capacity} at error-correction level {self.error_correction}"
            )
            logger.warning(msg)
            raise EncodingFailure(msg, payload_len=len(payload), capacity=self.capacity)
