"""
Two-device handshake in one process.

Device A renders its public key as a QR code; device B "scans" the payload
on a worker thread, validates it and stores A as a trusted contact. Both
sides print the fingerprint so it can be compared aloud.
"""

import logging
import sys
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from qrhandshake import HandshakeError, ScanAborted
from qrhandshake.adapters import JsonContactStore, QrCodeRenderer, TextScanner
from qrhandshake.core import FingerprintDeriver, HandshakeOrchestrator


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)
    workdir = Path(tempfile.mkdtemp(prefix="qrhandshake-"))

    device_a = HandshakeOrchestrator()
    device_b = HandshakeOrchestrator(
        contact_store=JsonContactStore(workdir / "contacts.json")
    )

    try:
        payload, image = device_a.prepare_outgoing_image(QrCodeRenderer(), 400, 400)
        image_path = workdir / "device_a.png"
        image_path.write_bytes(image)
        logger.info("Device A shows %s", image_path)

        with ThreadPoolExecutor(max_workers=1) as pool:
            scanner = TextScanner(lambda: payload, executor=pool)
            _, fingerprint = device_b.accept_scan(scanner)
    except ScanAborted as err:
        logger.info("Nothing scanned: %s", err.status.value)
        return
    except HandshakeError:
        logger.exception("Handshake failed")
        sys.exit(1)

    logger.info(
        "Device A reads: %s",
        FingerprintDeriver.format_for_display(device_a.local_fingerprint()),
    )
    logger.info("Device B reads: %s", FingerprintDeriver.format_for_display(fingerprint))
    logger.info(
        "Fingerprints match: %s",
        FingerprintDeriver.fingerprints_match(device_a.local_fingerprint(), fingerprint),
    )


if __name__ == "__main__":
    main()
