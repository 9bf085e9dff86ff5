"""Tests for signing capabilities."""

import threading
import time

import pytest

from tokenseal.exceptions import PrimitiveFailure
from tokenseal.security import (
    MacCapability,
    MacPrimitive,
    SignatureCapability,
    StaticKeyProvider,
)


def test_mac_capability_sign_and_verify() -> None:
    capability = MacCapability("HS256", MacPrimitive("HS256", b"secret"))
    signature = capability.sign(b"input")

    assert len(signature) == 32
    assert capability.verify(signature, b"input")
    assert not capability.verify(signature, b"other")
    assert not capability.verify(signature[:-1], b"input")


def test_signature_capability_uses_public_key(rsa_keys) -> None:
    private_pem, public_pem = rsa_keys
    signer = SignatureCapability(
        "RS256", StaticKeyProvider(private_key=private_pem).get_signature_primitive("RS256")
    )
    verifier = SignatureCapability(
        "RS256", StaticKeyProvider(public_key=public_pem).get_signature_primitive("RS256")
    )

    signature = signer.sign(b"input")
    assert verifier.verify(signature, b"input")
    assert not verifier.verify(signature, b"tampered")
    assert not verifier.verify(b"\x00" * len(signature), b"input")


def test_signing_without_private_key_is_primitive_failure(rsa_keys) -> None:
    _, public_pem = rsa_keys
    verifier = SignatureCapability(
        "RS256", StaticKeyProvider(public_key=public_pem).get_signature_primitive("RS256")
    )
    with pytest.raises(PrimitiveFailure) as excinfo:
        verifier.sign(b"input")
    assert isinstance(excinfo.value.__cause__, RuntimeError)


class BrokenPrimitive:
    def do_final(self, data):
        raise OSError("hardware token unplugged")


def test_mac_primitive_errors_are_wrapped() -> None:
    capability = MacCapability("HS256", BrokenPrimitive())
    with pytest.raises(PrimitiveFailure):
        capability.sign(b"input")
    with pytest.raises(PrimitiveFailure):
        capability.verify(b"sig", b"input")


class SlowPrimitive:
    """Records how many calls overlap."""

    def __init__(self) -> None:
        self.active = 0
        self.max_active = 0
        self._counter_lock = threading.Lock()

    def do_final(self, data):
        with self._counter_lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.01)
        with self._counter_lock:
            self.active -= 1
        return data


def test_capability_serializes_access_to_primitive() -> None:
    primitive = SlowPrimitive()
    capability = MacCapability("HS256", primitive)

    threads = [threading.Thread(target=capability.sign, args=(b"x",)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert primitive.max_active == 1


def test_capabilities_do_not_share_locks() -> None:
    first = MacCapability("HS256", MacPrimitive("HS256", b"a"))
    second = MacCapability("HS256", MacPrimitive("HS256", b"a"))
    assert first._lock is not second._lock
