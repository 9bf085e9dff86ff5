"""Signing capabilities: one per algorithm identifier.

There are exactly two variants.  :class:`MacCapability` covers the HMAC
family, :class:`SignatureCapability` the RSA family.  Both expose ``sign`` and
``verify`` and serialize access to the primitive they wrap.
"""

from __future__ import annotations

import hmac
import logging
import threading
from dataclasses import dataclass, field
from typing import Protocol, Union

from ..exceptions import PrimitiveFailure
from .primitives import MacPrimitive, SignaturePrimitive

logger = logging.getLogger(__name__)


class SigningCapability(Protocol):
    algorithm: str

    def sign(self, data: bytes) -> bytes: ...

    def verify(self, signature: bytes, data: bytes) -> bool: ...


@dataclass(frozen=True)
class MacCapability:
    """Signs and verifies by recomputing the MAC."""

    algorithm: str
    primitive: MacPrimitive
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def _mac(self, data: bytes) -> bytes:
        with self._lock:
            try:
                return self.primitive.do_final(data)
            except Exception as exc:
                logger.warning("MAC primitive for %s failed: %s", self.algorithm, exc)
                raise PrimitiveFailure(f"{self.algorithm} MAC computation failed") from exc

    def sign(self, data: bytes) -> bytes:
        return self._mac(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        return hmac.compare_digest(signature, self._mac(data))


@dataclass(frozen=True)
class SignatureCapability:
    """Signs with the private key, verifies with the public key."""

    algorithm: str
    primitive: SignaturePrimitive
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def sign(self, data: bytes) -> bytes:
        with self._lock:
            try:
                return self.primitive.sign(data)
            except Exception as exc:
                logger.warning("Signature primitive for %s failed: %s", self.algorithm, exc)
                raise PrimitiveFailure(f"{self.algorithm} signing failed: {exc}") from exc

    def verify(self, signature: bytes, data: bytes) -> bool:
        with self._lock:
            try:
                return self.primitive.verify(signature, data)
            except Exception as exc:
                logger.warning("Signature primitive for %s failed: %s", self.algorithm, exc)
                raise PrimitiveFailure(f"{self.algorithm} verification failed: {exc}") from exc


Capability = Union[MacCapability, SignatureCapability]

__all__ = ["SigningCapability", "MacCapability", "SignatureCapability", "Capability"]
