"""
Scanned payload decoding and validation.

Any text can reach this module from a scanner, so every check fails closed
and every failure is a MalformedPayload carrying the reason. Both the Base64
layer and the DER layer must be canonical: the text must re-encode to
itself and the key must re-serialize to the scanned bytes, so no character
of a valid payload can change without either an error or a different key.
"""

from __future__ import annotations

import base64
import logging
from typing import NoReturn

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa

from qrhandshake.common import CryptoUtils
from qrhandshake.common.config import Config
from qrhandshake.common.exceptions import MalformedPayload, MalformedReason
from qrhandshake.common.models import KeyAlgorithm, PublicKeyMaterial

logger = logging.getLogger(__name__)


class PayloadDecoder:
    """Parses scanned text back into RSA public key material."""

    def __init__(self, max_payload_len: int | None = None) -> None:
        config = Config()
        self.max_payload_len = (
            config.MAX_PAYLOAD_LEN if max_payload_len is None else max_payload_len
        )
        self.min_key_size = config.MIN_KEY_SIZE

    def decode(self, text: str) -> PublicKeyMaterial:
        """Decode ``text`` or raise MalformedPayload."""
        if not isinstance(text, str):
            self._reject(MalformedReason.INVALID_BASE64, "payload is not text")

        # Scanner apps often append a newline; interior whitespace stays invalid
        text = text.strip()
        if not text:
            self._reject(MalformedReason.EMPTY)
        if len(text) > self.max_payload_len:
            self._reject(
                MalformedReason.OVERSIZED,
                f"{len(text)} characters, limit is {self.max_payload_len}",
            )

        der = self._decode_base64(text)
        public_key = self._load_public_key(der)

        if not isinstance(public_key, rsa.RSAPublicKey):
            self._reject(
                MalformedReason.ALGORITHM_MISMATCH,
                f"expected RSA, got {type(public_key).__name__}",
            )
        if CryptoUtils.spki_der(public_key) != der:
            self._reject(MalformedReason.NON_CANONICAL_DER)
        self._check_strength(public_key)

        return PublicKeyMaterial(
            der=der,
            algorithm=KeyAlgorithm.RSA,
            key_size=public_key.key_size,
        )

    def _decode_base64(self, text: str) -> bytes:
        try:
            der = base64.b64decode(text, validate=True)
        except ValueError as err:
            # binascii.Error and non-ASCII input are both ValueErrors
            self._reject(MalformedReason.INVALID_BASE64, str(err))
        if base64.b64encode(der).decode("ascii") != text:
            self._reject(MalformedReason.NON_CANONICAL_BASE64)
        return der

    def _load_public_key(self, der: bytes):
        try:
            return CryptoUtils.load_spki(der)
        except (ValueError, TypeError, UnsupportedAlgorithm) as err:
            self._reject(MalformedReason.INVALID_DER, str(err))

    def _check_strength(self, public_key: rsa.RSAPublicKey) -> None:
        numbers = public_key.public_numbers()
        if public_key.key_size < self.min_key_size:
            self._reject(
                MalformedReason.WEAK_KEY,
                f"{public_key.key_size}-bit modulus, minimum is {self.min_key_size}",
            )
        if numbers.n % 2 == 0:
            self._reject(MalformedReason.WEAK_KEY, "even modulus")
        if numbers.e < 3 or numbers.e % 2 == 0:
            self._reject(MalformedReason.WEAK_KEY, "invalid public exponent")

    @staticmethod
    def _reject(reason: MalformedReason, detail: str = "") -> NoReturn:
        logger.debug("Rejected payload: %s", reason.value)
        raise MalformedPayload(reason, detail)
