"""
Custom exceptions for the handshake.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from qrhandshake.common.models import ScanStatus


class MalformedReason(str, Enum):
    """Internal diagnostic for a rejected payload."""

    EMPTY = "empty"
    OVERSIZED = "oversized"
    INVALID_BASE64 = "invalid_base64"
    NON_CANONICAL_BASE64 = "non_canonical_base64"
    INVALID_DER = "invalid_der"
    ALGORITHM_MISMATCH = "algorithm_mismatch"
    NON_CANONICAL_DER = "non_canonical_der"
    WEAK_KEY = "weak_key"


class HandshakeError(Exception):
    """Base class for all handshake failures."""


class KeyGenerationFailure(HandshakeError):
    """The local keypair could not be generated."""


class EncodingFailure(HandshakeError):
    """The payload does not fit the optical channel."""

    def __init__(self, message: str, payload_len: int = 0, capacity: int = 0) -> None:
        super().__init__(message)
        self.payload_len = payload_len
        self.capacity = capacity


class MalformedPayload(HandshakeError):
    """Scanned text is not a valid encoded public key.

    Every rejection reads as "invalid code" to the user; ``reason`` tells
    the rejections apart for diagnostics.
    """

    def __init__(self, reason: MalformedReason, detail: str = "") -> None:
        message = f"Invalid QR code ({reason.value})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


class ScanAborted(HandshakeError):
    """The scan was cancelled or no scanner was available."""

    def __init__(self, status: ScanStatus, message: str = "") -> None:
        super().__init__(message or f"Scan aborted: {status.value}")
        self.status = status


class ContactStoreError(HandshakeError):
    """The contacts file exists but cannot be read as contacts."""
