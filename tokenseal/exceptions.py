"""Error types raised by the token codec."""

from __future__ import annotations

from typing import Optional


class TokenError(Exception):
    """Base class for every error surfaced by :mod:`tokenseal`."""


class MalformedToken(TokenError, ValueError):
    """Token structure, base64url or JSON content is invalid."""


class AlgorithmNotSupported(TokenError):
    """The requested algorithm is not available in the registry."""

    def __init__(self, algorithm: Optional[str], reason: Optional[str] = None) -> None:
        self.algorithm = algorithm
        self.reason = reason
        if algorithm is None:
            message = "Algorithm not supported: header has no 'alg'"
        else:
            message = f"Algorithm not supported: {algorithm}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SignatureVerificationFailed(TokenError):
    """The embedded signature does not match the signing input."""


class PrimitiveFailure(TokenError):
    """The underlying cryptographic primitive failed during sign or verify."""


class KeyUnavailable(TokenError):
    """Raised by key providers when they cannot supply a primitive.

    The algorithm registry catches this while it is being built and records
    the algorithm as unavailable.
    """


__all__ = [
    "TokenError",
    "MalformedToken",
    "AlgorithmNotSupported",
    "SignatureVerificationFailed",
    "PrimitiveFailure",
    "KeyUnavailable",
]
