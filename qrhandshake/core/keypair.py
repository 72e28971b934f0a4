"""
Session-scoped RSA keypair generation.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa

from qrhandshake.common import Configurable, CryptoUtils
from qrhandshake.common.config import Config
from qrhandshake.common.exceptions import KeyGenerationFailure
from qrhandshake.common.models import KeyAlgorithm, PublicKeyMaterial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """The local asymmetric keypair. The private half never leaves the process."""

    private_key: rsa.RSAPrivateKey = field(repr=False)
    public_key: rsa.RSAPublicKey

    @property
    def public_material(self) -> PublicKeyMaterial:
        return PublicKeyMaterial(
            der=CryptoUtils.spki_der(self.public_key),
            algorithm=KeyAlgorithm.RSA,
            key_size=self.public_key.key_size,
        )


class KeyPairProvider(Configurable):
    """Generates the session keypair once and hands out the cached instance."""

    def __init__(self, **overrides: Any) -> None:
        self.config = Config()
        self.apply_overrides(overrides, self.config, ["key_size", "public_exponent"])
        if self.key_size < self.config.MIN_KEY_SIZE:
            msg = (
                f"RSA key size {self.key_size} is below the minimum of "
                f"{self.config.MIN_KEY_SIZE} bits"
            )
            raise ValueError(msg)

        self._lock = threading.Lock()
        self._key_pair: KeyPair | None = None
        self.generation_count = 0

    def get_or_create_key_pair(self) -> KeyPair:
        """Return the session keypair, generating it on first use."""
        key_pair = self._key_pair
        if key_pair is not None:
            return key_pair

        with self._lock:
            if self._key_pair is None:
                self._key_pair = self._generate()
            return self._key_pair

    def _generate(self) -> KeyPair:
        logger.info("Generating RSA-%d session keypair...", self.key_size)
        try:
            private_key = rsa.generate_private_key(
                public_exponent=self.public_exponent,
                key_size=self.key_size,
            )
        except (UnsupportedAlgorithm, ValueError, OSError) as err:
            msg = f"Could not generate RSA-{self.key_size} keypair: {err}"
            raise KeyGenerationFailure(msg) from err

        self.generation_count += 1
        return KeyPair(private_key=private_key, public_key=private_key.public_key())
