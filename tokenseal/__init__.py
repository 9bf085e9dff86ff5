"""Tokenseal: compact signed tokens with a pluggable algorithm registry."""

from .exceptions import (
    AlgorithmNotSupported,
    KeyUnavailable,
    MalformedToken,
    PrimitiveFailure,
    SignatureVerificationFailed,
    TokenError,
)
from .security import (
    AlgorithmRegistry,
    DecodedToken,
    KeyProvider,
    StaticKeyProvider,
    TokenCodec,
    get_codec,
)

__version__ = "0.1.0"
__all__ = [
    "AlgorithmNotSupported",
    "AlgorithmRegistry",
    "DecodedToken",
    "KeyProvider",
    "KeyUnavailable",
    "MalformedToken",
    "PrimitiveFailure",
    "SignatureVerificationFailed",
    "StaticKeyProvider",
    "TokenCodec",
    "TokenError",
    "get_codec",
]
