"""Keyed cryptographic primitives handed out by key providers."""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..constants import MAC_ALGORITHMS, SIGNATURE_ALGORITHMS

_RSA_HASHES = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


class MacPrimitive:
    """HMAC keyed with a shared secret.

    The keyed state is prepared once and copied for every message, so the
    instance must not be used from two threads at the same time.
    """

    def __init__(self, algorithm: str, secret: bytes) -> None:
        self.algorithm = algorithm
        self._mac = hmac.new(secret, digestmod=getattr(hashlib, MAC_ALGORITHMS[algorithm]))

    def do_final(self, data: bytes) -> bytes:
        """Return the MAC of ``data``."""
        mac = self._mac.copy()
        mac.update(data)
        return mac.digest()


class SignaturePrimitive:
    """RSASSA-PKCS1-v1_5 signer/verifier bound to an RSA key pair.

    ``private_key`` may be omitted for verify-only deployments.
    """

    def __init__(
        self,
        algorithm: str,
        public_key: rsa.RSAPublicKey,
        private_key: Optional[rsa.RSAPrivateKey] = None,
    ) -> None:
        self.algorithm = algorithm
        self.public_key = public_key
        self.private_key = private_key
        self._hash = _RSA_HASHES[SIGNATURE_ALGORITHMS[algorithm]]

    @property
    def can_sign(self) -> bool:
        return self.private_key is not None

    def sign(self, data: bytes) -> bytes:
        if self.private_key is None:
            raise RuntimeError(f"{self.algorithm} primitive has no private key")
        return self.private_key.sign(data, padding.PKCS1v15(), self._hash())

    def verify(self, signature: bytes, data: bytes) -> bool:
        try:
            self.public_key.verify(signature, data, padding.PKCS1v15(), self._hash())
        except InvalidSignature:
            return False
        return True


Primitive = Union[MacPrimitive, SignaturePrimitive]

__all__ = ["MacPrimitive", "SignaturePrimitive", "Primitive"]
