"""Common cryptographic utilities.
"""

from __future__ import annotations

import hashlib

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes


class CryptoUtils:
    """Utility class for cryptographic operations."""

    @staticmethod
    def spki_der(public_key: PublicKeyTypes) -> bytes:
        """Serialize a public key as X.509 SubjectPublicKeyInfo DER."""
        return public_key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    @staticmethod
    def load_spki(der: bytes) -> PublicKeyTypes:
        """Parse SubjectPublicKeyInfo DER. Raises whatever the backend raises."""
        return serialization.load_der_public_key(der)

    @staticmethod
    def sha256_hex(data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()
