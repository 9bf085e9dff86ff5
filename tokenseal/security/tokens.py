"""Encoding and verification of compact ``header.payload.signature`` tokens."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from ..constants import DEFAULT_ALGORITHM, SEGMENT_SEPARATOR
from ..exceptions import AlgorithmNotSupported, MalformedToken, SignatureVerificationFailed
from ..utils.base64url import b64url_decode, b64url_encode
from .models import DecodedToken, TokenHeader
from .registry import AlgorithmRegistry

logger = logging.getLogger(__name__)


def _serialize(value: Mapping[str, Any]) -> bytes:
    try:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise MalformedToken(f"payload is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


def _split(token: str) -> Tuple[str, str, str]:
    if not isinstance(token, str):
        raise MalformedToken("token must be a string")
    segments = token.split(SEGMENT_SEPARATOR)
    if len(segments) != 3:
        logger.debug("Rejecting token with %d segments", len(segments))
        raise MalformedToken(f"Not enough or too many segments ({len(segments)})")
    if not all(segments):
        raise MalformedToken("token contains an empty segment")
    return segments[0], segments[1], segments[2]


def _parse_segment(segment: str, name: str) -> Dict[str, Any]:
    raw = b64url_decode(segment)
    try:
        value = json.loads(raw.decode("utf-8"))
    except (ValueError, RecursionError) as exc:
        # RecursionError: nesting deeper than the json module can parse
        raise MalformedToken(f"{name} segment is not valid JSON") from exc
    if not isinstance(value, dict):
        raise MalformedToken(f"{name} segment is not a JSON object")
    return value


class TokenCodec:
    """Signs payloads into tokens and verifies tokens back into payloads.

    A codec only holds a reference to an :class:`AlgorithmRegistry`; many
    codecs (one per thread if desired) can share the same registry.  Locking
    happens inside each signing capability.

    The signature is checked against the header and payload segments exactly
    as they appear in the token, and before the payload is parsed.
    """

    def __init__(
        self, registry: AlgorithmRegistry, default_algorithm: str = DEFAULT_ALGORITHM
    ) -> None:
        self.registry = registry
        self.default_algorithm = default_algorithm

    def encode(self, payload: Any, algorithm: Optional[str] = None) -> str:
        """Return a signed token for ``payload``.

        Args:
            payload: A mapping or pydantic model holding the claims.
            algorithm: Algorithm identifier, ``default_algorithm`` when omitted.
        """
        if algorithm is None:
            algorithm = self.default_algorithm
        capability = self.registry.require(algorithm)

        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        if not isinstance(payload, Mapping):
            raise MalformedToken("payload must be a JSON object")
        payload = dict(payload)

        header = TokenHeader(alg=algorithm)
        header_segment = b64url_encode(_serialize(header.model_dump()))
        payload_segment = b64url_encode(_serialize(payload))
        signing_input = f"{header_segment}{SEGMENT_SEPARATOR}{payload_segment}".encode("utf-8")
        signature_segment = b64url_encode(capability.sign(signing_input))

        return SEGMENT_SEPARATOR.join([header_segment, payload_segment, signature_segment])

    def decode(self, token: str, verify: bool = True) -> Dict[str, Any]:
        """Return the payload of ``token``.

        ``verify=False`` skips the signature check entirely.  Use it for
        inspection only, never to make a trust decision.
        """
        return self.decode_complete(token, verify=verify).payload

    def decode_header(self, token: str) -> Dict[str, Any]:
        """Return the header of ``token`` without verifying anything."""
        header_segment, _, _ = _split(token)
        return _parse_segment(header_segment, "header")

    def decode_complete(self, token: str, verify: bool = True) -> DecodedToken:
        header_segment, payload_segment, signature_segment = _split(token)
        header = _parse_segment(header_segment, "header")

        if verify:
            self._verify(header, header_segment, payload_segment, signature_segment)

        payload = _parse_segment(payload_segment, "payload")
        return DecodedToken(
            header=header,
            payload=payload,
            signature=signature_segment,
            verified=verify,
        )

    def _verify(
        self,
        header: Dict[str, Any],
        header_segment: str,
        payload_segment: str,
        signature_segment: str,
    ) -> None:
        algorithm = header.get("alg")
        if algorithm is not None and not isinstance(algorithm, str):
            raise AlgorithmNotSupported(repr(algorithm), "'alg' must be a string")
        capability = self.registry.require(algorithm)

        signing_input = f"{header_segment}{SEGMENT_SEPARATOR}{payload_segment}".encode("utf-8")
        signature = b64url_decode(signature_segment)
        if not capability.verify(signature, signing_input):
            logger.debug("Signature verification failed for %s token", algorithm)
            raise SignatureVerificationFailed("Signature verification failed")


__all__ = ["TokenCodec"]
