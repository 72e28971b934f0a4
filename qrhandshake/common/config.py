"""
Configuration settings for the QR handshake.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Byte-mode capacity of a version 40 QR symbol per error-correction level
QR_BYTE_CAPACITY: dict[str, int] = {
    "L": 2953,
    "M": 2331,
    "Q": 1663,
    "H": 1273,
}


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as err:
        msg = f"{name} must be an integer, got {value!r}"
        raise ValueError(msg) from err


class Config:
    """Central configuration class for all handshake settings."""

    def __init__(self) -> None:
        # Key material
        self.KEY_SIZE: int = _int_env("QRHANDSHAKE_KEY_SIZE", 2048)
        self.MIN_KEY_SIZE: int = 2048  # Not overridable
        self.PUBLIC_EXPONENT: int = 65537

        # Optical channel
        self.ERROR_CORRECTION: str = os.getenv(
            "QRHANDSHAKE_ERROR_CORRECTION", "M"
        ).upper()
        self.QR_SIZE: int = _int_env("QRHANDSHAKE_QR_SIZE", 400)
        self.QR_BORDER: int = 4
        self.MAX_PAYLOAD_LEN: int = QR_BYTE_CAPACITY["L"]  # Reject before decoding

        # File paths
        self.BASE_DIR: Path = Path(__file__).parent.parent
        self.DATA_DIR: Path = Path(
            os.getenv("QRHANDSHAKE_DATA_DIR", str(Path.home() / ".qrhandshake"))
        )
        self.CONTACTS_FILE_PATH: Path = self.DATA_DIR / "contacts.json"

        # Logging
        self.LOG_LEVEL: int = getattr(
            logging, os.getenv("QRHANDSHAKE_LOG_LEVEL", "INFO").upper(), logging.INFO
        )

    def payload_capacity(self, error_correction: str | None = None) -> int:
        """Maximum payload length for an error-correction level."""
        level = (error_correction or self.ERROR_CORRECTION).upper()
        try:
            return QR_BYTE_CAPACITY[level]
        except KeyError as err:
            msg = f"Unknown error-correction level {level!r}, expected one of L, M, Q, H"
            raise ValueError(msg) from err
