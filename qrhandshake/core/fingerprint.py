"""
Contact fingerprints.

A fingerprint is the full SHA-256 digest of the SubjectPublicKeyInfo DER
bytes as 64 lowercase hex characters. It is never truncated; grouping for
display is cosmetic and does not change what is compared.
"""

from __future__ import annotations

import hmac

from qrhandshake.common import CryptoUtils
from qrhandshake.common.models import PublicKeyMaterial

FINGERPRINT_LENGTH = 64


class FingerprintDeriver:
    """Derives deterministic fingerprints from public key material."""

    @staticmethod
    def fingerprint(material: PublicKeyMaterial) -> str:
        return CryptoUtils.sha256_hex(material.der)

    @staticmethod
    def format_for_display(fingerprint: str, group_size: int = 4) -> str:
        """Split a fingerprint into space-separated groups for reading aloud."""
        return " ".join(
            fingerprint[i : i + group_size]
            for i in range(0, len(fingerprint), group_size)
        )

    @staticmethod
    def fingerprints_match(expected: str, actual: str) -> bool:
        """Compare two fingerprints, ignoring display spacing and case."""
        expected = expected.replace(" ", "").lower()
        actual = actual.replace(" ", "").lower()
        return hmac.compare_digest(expected.encode(), actual.encode())
