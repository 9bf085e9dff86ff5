"""Algorithm registry, key providers and the token codec."""

from __future__ import annotations

from typing import Optional

from ..config import TokensealConfig, load_config
from .capabilities import MacCapability, SignatureCapability, SigningCapability
from .keys import KeyProvider, StaticKeyProvider
from .models import DecodedToken, TokenHeader
from .primitives import MacPrimitive, SignaturePrimitive
from .registry import AlgorithmRegistry
from .tokens import TokenCodec


def get_codec(config: Optional[TokensealConfig] = None) -> TokenCodec:
    """Build a codec from the loaded configuration.

    Key material comes from ``config.keys``; see
    :func:`~tokenseal.config.load_config` for the file and environment
    variables consulted when ``config`` is omitted.
    """

    config = config or load_config()
    registry = AlgorithmRegistry(StaticKeyProvider.from_config(config.keys))
    return TokenCodec(registry, default_algorithm=config.default_algorithm)


__all__ = [
    "AlgorithmRegistry",
    "DecodedToken",
    "KeyProvider",
    "MacCapability",
    "MacPrimitive",
    "SignatureCapability",
    "SignaturePrimitive",
    "SigningCapability",
    "StaticKeyProvider",
    "TokenCodec",
    "TokenHeader",
    "get_codec",
]
