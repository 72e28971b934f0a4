"""
Pydantic models for key material, contacts and scan results.
"""

from __future__ import annotations

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

FINGERPRINT_PATTERN = r"^[0-9a-f]{64}$"


class KeyAlgorithm(str, Enum):
    RSA = "RSA"


class ScanStatus(str, Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    UNAVAILABLE = "unavailable"


class PublicKeyMaterial(BaseModel):
    """SubjectPublicKeyInfo DER bytes of a public key."""

    model_config = ConfigDict(frozen=True)

    der: bytes = Field(min_length=1, repr=False)
    algorithm: KeyAlgorithm = KeyAlgorithm.RSA
    key_size: int = Field(gt=0)


class TrustedContact(BaseModel):
    material: PublicKeyMaterial
    fingerprint: str = Field(pattern=FINGERPRINT_PATTERN)
    added_at: int = Field(default_factory=lambda: int(time.time()))


class ScanResult(BaseModel):
    """Outcome of one request to the scanning collaborator."""

    status: ScanStatus
    text: str | None = None

    @model_validator(mode="after")
    def _text_only_on_success(self) -> ScanResult:
        if self.status is ScanStatus.SUCCESS and self.text is None:
            msg = "a successful scan must carry the scanned text"
            raise ValueError(msg)
        if self.status is not ScanStatus.SUCCESS and self.text is not None:
            msg = f"a {self.status.value} scan cannot carry text"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, text: str) -> ScanResult:
        return cls(status=ScanStatus.SUCCESS, text=text)

    @classmethod
    def cancelled(cls) -> ScanResult:
        return cls(status=ScanStatus.CANCELLED)

    @classmethod
    def unavailable(cls) -> ScanResult:
        return cls(status=ScanStatus.UNAVAILABLE)
