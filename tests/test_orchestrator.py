import logging
import re
from concurrent.futures import Future

import pytest

from qrhandshake.adapters import TextScanner
from qrhandshake.common.exceptions import (
    EncodingFailure,
    KeyGenerationFailure,
    MalformedPayload,
    ScanAborted,
)
from qrhandshake.common.models import ScanResult, ScanStatus, TrustedContact
from qrhandshake.core import HandshakeOrchestrator, PayloadEncoder


class MemoryContactStore:
    def __init__(self) -> None:
        self.saved: list[TrustedContact] = []

    def save_contact(self, contact: TrustedContact) -> None:
        self.saved.append(contact)

    def load_contacts(self) -> dict[str, TrustedContact]:
        return {c.fingerprint: c for c in self.saved}


class FailingKeyProvider:
    def get_or_create_key_pair(self):
        msg = "entropy source unavailable"
        raise KeyGenerationFailure(msg)


class CancelledScanner:
    def scan(self) -> Future:
        future: Future = Future()
        future.cancel()
        return future


@pytest.fixture(scope="module")
def device_a() -> HandshakeOrchestrator:
    return HandshakeOrchestrator()


@pytest.fixture
def store() -> MemoryContactStore:
    return MemoryContactStore()


@pytest.fixture
def device_b(store: MemoryContactStore) -> HandshakeOrchestrator:
    return HandshakeOrchestrator(contact_store=store)


def test_end_to_end_handshake(
    device_a: HandshakeOrchestrator,
    device_b: HandshakeOrchestrator,
    store: MemoryContactStore,
) -> None:
    payload = device_a.prepare_outgoing()
    assert payload
    assert len(payload) <= device_a.encoder.capacity

    material, fingerprint = device_b.accept_incoming(payload)

    a_key = device_a.key_provider.get_or_create_key_pair()
    assert material == a_key.public_material
    assert re.fullmatch(r"[0-9a-f]{64}", fingerprint)
    assert fingerprint == device_a.local_fingerprint()
    assert len(store.saved) == 1
    assert store.saved[0].fingerprint == fingerprint
    assert store.saved[0].material == material


def test_prepare_outgoing_reuses_session_key(device_a: HandshakeOrchestrator) -> None:
    assert device_a.prepare_outgoing() == device_a.prepare_outgoing()
    assert device_a.key_provider.generation_count == 1


def test_corrupted_payload_stores_nothing(
    device_a: HandshakeOrchestrator,
    device_b: HandshakeOrchestrator,
    store: MemoryContactStore,
) -> None:
    payload = device_a.prepare_outgoing()
    with pytest.raises(MalformedPayload):
        device_b.accept_incoming(payload[:-1] + "!")
    assert store.saved == []


def test_accept_without_store(device_a: HandshakeOrchestrator) -> None:
    material, _ = HandshakeOrchestrator().accept_incoming(device_a.prepare_outgoing())
    assert material.key_size == 2048  # noqa: PLR2004


def test_prepare_outgoing_image(device_a: HandshakeOrchestrator) -> None:
    class RecordingRenderer:
        def __init__(self) -> None:
            self.calls: list[tuple[str, int, int]] = []

        def render(self, payload: str, width: int, height: int) -> bytes:
            self.calls.append((payload, width, height))
            return b"image"

    renderer = RecordingRenderer()
    payload, image = device_a.prepare_outgoing_image(renderer, 400, 400)
    assert image == b"image"
    assert renderer.calls == [(payload, 400, 400)]
    assert payload == device_a.prepare_outgoing()


def test_key_generation_failure_surfaces() -> None:
    orchestrator = HandshakeOrchestrator(key_provider=FailingKeyProvider())
    with pytest.raises(KeyGenerationFailure):
        orchestrator.prepare_outgoing()


def test_capacity_checked_before_render(device_a: HandshakeOrchestrator) -> None:
    encoder = PayloadEncoder()
    encoder.capacity = 100
    orchestrator = HandshakeOrchestrator(
        key_provider=device_a.key_provider, encoder=encoder
    )
    with pytest.raises(EncodingFailure):
        orchestrator.prepare_outgoing()


@pytest.mark.parametrize(
    ("result", "status"),
    [
        (ScanResult.cancelled(), ScanStatus.CANCELLED),
        (ScanResult.unavailable(), ScanStatus.UNAVAILABLE),
    ],
)
def test_scan_abort_is_not_malformed(
    result: ScanResult,
    status: ScanStatus,
    device_b: HandshakeOrchestrator,
    store: MemoryContactStore,
) -> None:
    with pytest.raises(ScanAborted) as exc_info:
        device_b.accept_scan_result(result)
    assert exc_info.value.status is status
    assert not isinstance(exc_info.value, MalformedPayload)
    assert store.saved == []


def test_accept_scan_success(
    device_a: HandshakeOrchestrator,
    device_b: HandshakeOrchestrator,
    store: MemoryContactStore,
) -> None:
    payload = device_a.prepare_outgoing()
    _, fingerprint = device_b.accept_scan(TextScanner(lambda: payload + "\n"))
    assert fingerprint == device_a.local_fingerprint()
    assert len(store.saved) == 1


def test_accept_scan_garbage(
    device_b: HandshakeOrchestrator, store: MemoryContactStore
) -> None:
    with pytest.raises(MalformedPayload):
        device_b.accept_scan(TextScanner(lambda: "https://example.com"))
    assert store.saved == []


def test_accept_scan_cancelled_future(device_b: HandshakeOrchestrator) -> None:
    with pytest.raises(ScanAborted) as exc_info:
        device_b.accept_scan(CancelledScanner())
    assert exc_info.value.status is ScanStatus.CANCELLED


def test_accept_scan_closed_stdin_is_unavailable(
    device_b: HandshakeOrchestrator, store: MemoryContactStore
) -> None:
    def closed_stdin() -> str:
        msg = "I/O operation on closed file."
        raise ValueError(msg)

    with pytest.raises(ScanAborted) as exc_info:
        device_b.accept_scan(TextScanner(closed_stdin))
    assert exc_info.value.status is ScanStatus.UNAVAILABLE
    assert store.saved == []


def test_key_material_never_logged(
    caplog: pytest.LogCaptureFixture,
    device_a: HandshakeOrchestrator,
    device_b: HandshakeOrchestrator,
) -> None:
    caplog.set_level(logging.DEBUG, logger="qrhandshake")

    payload = device_a.prepare_outgoing()
    material, fingerprint = device_b.accept_incoming(payload)
    with pytest.raises(MalformedPayload):
        device_b.accept_incoming(payload[:-1] + "!")

    messages = [record.getMessage() for record in caplog.records]
    assert any(fingerprint in m for m in messages)

    window = 16
    slices = {payload[i : i + window] for i in range(len(payload) - window + 1)}
    der_hex = material.der.hex()
    for message in messages:
        assert not any(s in message for s in slices)
        assert der_hex[:32] not in message
        assert repr(material.der)[:32] not in message
