"""
Handshake orchestration: the two operations the UI layer calls.
"""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError
from typing import TYPE_CHECKING

from qrhandshake.common.exceptions import MalformedPayload, ScanAborted
from qrhandshake.common.models import ScanResult, ScanStatus, TrustedContact

from .decoder import PayloadDecoder
from .encoder import PayloadEncoder
from .fingerprint import FingerprintDeriver
from .keypair import KeyPairProvider

if TYPE_CHECKING:
    from qrhandshake.common.interfaces import IContactStore, IQrRenderer, IQrScanner
    from qrhandshake.common.models import PublicKeyMaterial

logger = logging.getLogger(__name__)


class HandshakeOrchestrator:
    """Produces the local payload and accepts scanned ones.

    The only state kept across calls is the keypair memoized by the
    KeyPairProvider. Accepted contacts go to ``contact_store`` exactly once
    per successful accept and never on failure.
    """

    def __init__(
        self,
        key_provider: KeyPairProvider | None = None,
        encoder: PayloadEncoder | None = None,
        decoder: PayloadDecoder | None = None,
        deriver: FingerprintDeriver | None = None,
        contact_store: IContactStore | None = None,
    ) -> None:
        self.key_provider = key_provider or KeyPairProvider()
        self.encoder = encoder or PayloadEncoder()
        self.decoder = decoder or PayloadDecoder()
        self.deriver = deriver or FingerprintDeriver()
        self.contact_store = contact_store

    def prepare_outgoing(self) -> str:
        """Return the payload to render as this device's QR code.

        Raises KeyGenerationFailure or EncodingFailure.
        """
        key_pair = self.key_provider.get_or_create_key_pair()
        payload = self.encoder.encode(key_pair)
        self.encoder.check_capacity(payload)
        logger.info(
            "Prepared outgoing payload (%d chars), fingerprint %s",
            len(payload),
            self.deriver.fingerprint(key_pair.public_material),
        )
        return payload

    def prepare_outgoing_image(
        self, renderer: IQrRenderer, width: int, height: int
    ) -> tuple[str, bytes]:
        """Prepare the payload and have ``renderer`` draw it."""
        payload = self.prepare_outgoing()
        return payload, renderer.render(payload, width, height)

    def local_fingerprint(self) -> str:
        """Fingerprint of this device's key, for verbal comparison."""
        key_pair = self.key_provider.get_or_create_key_pair()
        return self.deriver.fingerprint(key_pair.public_material)

    def accept_incoming(self, scanned_text: str) -> tuple[PublicKeyMaterial, str]:
        """Validate a scanned payload and register the contact.

        Raises MalformedPayload without touching the contact store.
        """
        try:
            material = self.decoder.decode(scanned_text)
        except MalformedPayload as err:
            logger.warning("Rejected scanned payload: %s", err.reason.value)
            raise

        fingerprint = self.deriver.fingerprint(material)
        if self.contact_store is not None:
            self.contact_store.save_contact(
                TrustedContact(material=material, fingerprint=fingerprint)
            )
        logger.info("Contact added, fingerprint %s", fingerprint)
        return material, fingerprint

    def accept_scan_result(self, result: ScanResult) -> tuple[PublicKeyMaterial, str]:
        """Accept the outcome of a scan. Raises ScanAborted if there is no text."""
        if result.status is not ScanStatus.SUCCESS:
            logger.info("Scan ended without a code: %s", result.status.value)
            raise ScanAborted(result.status)
        return self.accept_incoming(result.text)

    def accept_scan(self, scanner: IQrScanner) -> tuple[PublicKeyMaterial, str]:
        """Request one scan from ``scanner`` and accept what it returns."""
        future = scanner.scan()
        try:
            result = future.result()
        except CancelledError as err:
            logger.info("Scan request was cancelled")
            raise ScanAborted(ScanStatus.CANCELLED) from err
        return self.accept_scan_result(result)
