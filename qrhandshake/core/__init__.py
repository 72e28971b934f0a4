"""
Handshake core: keypair, payload codec, fingerprints and orchestration.
"""

from .decoder import PayloadDecoder
from .encoder import PayloadEncoder
from .fingerprint import FingerprintDeriver
from .keypair import KeyPair, KeyPairProvider
from .orchestrator import HandshakeOrchestrator

__all__ = [
    "FingerprintDeriver",
    "HandshakeOrchestrator",
    "KeyPair",
    "KeyPairProvider",
    "PayloadDecoder",
    "PayloadEncoder",
]
