"""
Scanner boundary: one scan request resolves to one ScanResult.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Callable

from qrhandshake.common.models import ScanResult

logger = logging.getLogger(__name__)


class TextScanner:
    """Scanner backed by a callable that returns the decoded QR text.

    The reader stands in for whatever performs capture and barcode decoding
    (a camera app, a USB scanner in keyboard mode, a pasted line). It returns
    the text, or ``None``/empty when the user backs out, and raises OSError
    or ValueError (closed stream) when the device cannot be used. With an
    executor the reader runs off the calling thread.
    """

    def __init__(
        self,
        reader: Callable[[], str | None],
        executor: Executor | None = None,
    ) -> None:
        self.reader = reader
        self.executor = executor

    def scan(self) -> Future[ScanResult]:
        if self.executor is not None:
            return self.executor.submit(self._read)
        future: Future[ScanResult] = Future()
        future.set_result(self._read())
        return future

    def _read(self) -> ScanResult:
        try:
            text = self.reader()
        except (OSError, ValueError) as err:
            # ValueError: reading a closed stream
            logger.info("Scanner unavailable: %s", err)
            return ScanResult.unavailable()
        if text is None or not text.strip():
            return ScanResult.cancelled()
        return ScanResult.success(text)
