"""Key material providers for the algorithm registry."""

from __future__ import annotations

import abc
import logging
import os
from pathlib import Path
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..config import KeyConfig
from ..constants import MAC_ALGORITHMS, SIGNATURE_ALGORITHMS
from ..exceptions import KeyUnavailable
from .primitives import MacPrimitive, SignaturePrimitive

logger = logging.getLogger(__name__)

# PEM data as bytes, a path to a PEM file, or PEM text.
KeySource = Union[bytes, str, os.PathLike]


class KeyProvider(metaclass=abc.ABCMeta):
    """Supplies keyed primitives per algorithm identifier.

    Implementations raise :class:`~tokenseal.exceptions.KeyUnavailable` when
    an algorithm is unknown to them or its key is missing or unusable.
    """

    @abc.abstractmethod
    def get_mac_primitive(self, algorithm: str) -> MacPrimitive:
        """Return an HMAC primitive bound to the shared secret."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_signature_primitive(self, algorithm: str) -> SignaturePrimitive:
        """Return an RSA signature primitive bound to the configured key."""
        raise NotImplementedError


def _read_pem(source: KeySource) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, str) and source.lstrip().startswith("-----BEGIN"):
        return source.encode("ascii")
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise KeyUnavailable(f"cannot read key file {source}: {exc.strerror}") from exc


class StaticKeyProvider(KeyProvider):
    """Provider backed by a fixed secret and an optional RSA key pair.

    Keys are loaded when a primitive is requested, so a bad key only makes
    the affected algorithms unavailable.
    """

    def __init__(
        self,
        secret: Optional[Union[str, bytes]] = None,
        private_key: Optional[KeySource] = None,
        public_key: Optional[KeySource] = None,
        password: Optional[Union[str, bytes]] = None,
    ) -> None:
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if isinstance(password, str):
            password = password.encode("utf-8")
        self._secret = secret
        self._private_key = private_key
        self._public_key = public_key
        self._password = password

    @classmethod
    def from_config(cls, config: KeyConfig) -> "StaticKeyProvider":
        return cls(
            secret=config.secret_bytes(),
            private_key=config.private_key_path,
            public_key=config.public_key_path,
            password=config.private_key_password,
        )

    def get_mac_primitive(self, algorithm: str) -> MacPrimitive:
        if algorithm not in MAC_ALGORITHMS:
            raise KeyUnavailable(f"{algorithm} is not a MAC algorithm")
        if not self._secret:
            raise KeyUnavailable("no shared secret configured")
        return MacPrimitive(algorithm, self._secret)

    def get_signature_primitive(self, algorithm: str) -> SignaturePrimitive:
        if algorithm not in SIGNATURE_ALGORITHMS:
            raise KeyUnavailable(f"{algorithm} is not a signature algorithm")
        if self._private_key is None and self._public_key is None:
            raise KeyUnavailable("no RSA key configured")

        private_key = self._load_private_key() if self._private_key is not None else None
        if self._public_key is not None:
            public_key = self._load_public_key()
        else:
            public_key = private_key.public_key()
        logger.debug("Loaded RSA key material for %s (can_sign=%s)", algorithm, private_key is not None)
        return SignaturePrimitive(algorithm, public_key, private_key)

    def _load_private_key(self) -> rsa.RSAPrivateKey:
        data = _read_pem(self._private_key)
        try:
            key = serialization.load_pem_private_key(data, password=self._password)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyUnavailable(f"invalid private key: {exc}") from exc
        if not isinstance(key, rsa.RSAPrivateKey):
            raise KeyUnavailable("private key is not an RSA key")
        return key

    def _load_public_key(self) -> rsa.RSAPublicKey:
        data = _read_pem(self._public_key)
        try:
            key = serialization.load_pem_public_key(data)
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyUnavailable(f"invalid public key: {exc}") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise KeyUnavailable("public key is not an RSA key")
        return key


__all__ = ["KeyProvider", "StaticKeyProvider", "KeySource"]
