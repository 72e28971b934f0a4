"""
Interfaces and protocols for the external collaborators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from concurrent.futures import Future

    from qrhandshake.common.models import ScanResult, TrustedContact


class IQrRenderer(Protocol):
    """Protocol for turning a payload into a displayable optical code."""

    def render(self, payload: str, width: int, height: int) -> bytes: ...


class IQrScanner(Protocol):
    """Protocol for the camera/scanner boundary."""

    def scan(self) -> Future[ScanResult]: ...


class IContactStore(Protocol):
    """Protocol for contact persistence."""

    def save_contact(self, contact: TrustedContact) -> None: ...

    def load_contacts(self) -> dict[str, TrustedContact]: ...
