# QR public key handshake

from qrhandshake.common.exceptions import (
    EncodingFailure,
    HandshakeError,
    KeyGenerationFailure,
    MalformedPayload,
    ScanAborted,
)
from qrhandshake.common.models import PublicKeyMaterial, ScanResult, TrustedContact
from qrhandshake.core import HandshakeOrchestrator

__all__ = [
    "EncodingFailure",
    "HandshakeError",
    "HandshakeOrchestrator",
    "KeyGenerationFailure",
    "MalformedPayload",
    "PublicKeyMaterial",
    "ScanAborted",
    "ScanResult",
    "TrustedContact",
]
