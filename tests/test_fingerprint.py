import hashlib
import re

import pytest

from qrhandshake.common.models import PublicKeyMaterial
from qrhandshake.core.fingerprint import FINGERPRINT_LENGTH, FingerprintDeriver
from qrhandshake.core.keypair import KeyPairProvider


@pytest.fixture(scope="module")
def material() -> PublicKeyMaterial:
    return KeyPairProvider().get_or_create_key_pair().public_material


def test_fingerprint_is_sha256_of_der(material: PublicKeyMaterial) -> None:
    fp = FingerprintDeriver.fingerprint(material)
    assert fp == hashlib.sha256(material.der).hexdigest()
    assert len(fp) == FINGERPRINT_LENGTH
    assert re.fullmatch(r"[0-9a-f]{64}", fp)


def test_fingerprint_is_deterministic(material: PublicKeyMaterial) -> None:
    copy = PublicKeyMaterial(der=bytes(material.der), key_size=material.key_size)
    assert FingerprintDeriver.fingerprint(material) == FingerprintDeriver.fingerprint(
        copy
    )


def test_one_bit_change_gives_unrelated_fingerprint(
    material: PublicKeyMaterial,
) -> None:
    der = bytearray(material.der)
    der[100] ^= 0x01
    flipped = PublicKeyMaterial(der=bytes(der), key_size=material.key_size)

    a = FingerprintDeriver.fingerprint(material)
    b = FingerprintDeriver.fingerprint(flipped)
    assert a != b
    # Avalanche: far more than a handful of hex digits differ
    assert sum(x != y for x, y in zip(a, b)) > 32  # noqa: PLR2004


def test_different_keys_have_different_fingerprints(
    material: PublicKeyMaterial,
) -> None:
    other = KeyPairProvider().get_or_create_key_pair().public_material
    assert FingerprintDeriver.fingerprint(material) != FingerprintDeriver.fingerprint(
        other
    )


def test_format_for_display() -> None:
    fp = "0123456789abcdef" * 4
    shown = FingerprintDeriver.format_for_display(fp)
    assert shown.startswith("0123 4567 89ab cdef 0123")
    assert len(shown.split(" ")) == 16  # noqa: PLR2004
    assert shown.replace(" ", "") == fp


def test_fingerprints_match_ignores_display_format() -> None:
    fp = "0123456789abcdef" * 4
    assert FingerprintDeriver.fingerprints_match(
        fp, FingerprintDeriver.format_for_display(fp).upper()
    )
    assert not FingerprintDeriver.fingerprints_match(fp, "f" + fp[1:])
