"""Base64url transform used for token segments.

Segments are standard base64 with ``+`` and ``/`` swapped for ``-`` and
``_`` and the ``=`` padding removed, so that ``.`` stays an unambiguous
separator.
"""

from __future__ import annotations

import base64

from ..exceptions import MalformedToken


def escape(text: str) -> str:
    """Turn standard base64 text into its unpadded url-safe form."""
    return text.replace("+", "-").replace("/", "_").replace("=", "")


def unescape(text: str) -> str:
    """Restore padding and the standard alphabet for ``text``.

    No byte sequence encodes to a length of ``1 mod 4``, so such input is
    rejected rather than padded.
    """
    if any(ch in text for ch in "+/="):
        raise MalformedToken("base64url segment contains non url-safe characters")
    remainder = len(text) % 4
    if remainder == 1:
        raise MalformedToken(f"invalid base64url length {len(text)}")
    padded = text + "=" * (-remainder % 4)
    return padded.replace("-", "+").replace("_", "/")


def b64url_encode(data: bytes) -> str:
    """Encode ``data`` as an unpadded base64url string."""
    return escape(base64.b64encode(data).decode("ascii"))


def b64url_decode(text: str) -> bytes:
    """Decode an unpadded base64url string."""
    padded = unescape(text)
    try:
        data = base64.b64decode(padded, validate=True)
    except ValueError as exc:
        # binascii.Error, or non-ascii characters in ``text``
        raise MalformedToken("invalid base64url segment") from exc
    # unused trailing bits must be zero, one encoding per byte string
    if b64url_encode(data) != text:
        raise MalformedToken("non-canonical base64url segment")
    return data


__all__ = ["escape", "unescape", "b64url_encode", "b64url_decode"]
