"""Constants shared across the token codec."""

from __future__ import annotations

from typing import Dict

TOKEN_TYPE = "JWT"
DEFAULT_ALGORITHM = "HS256"
SEGMENT_SEPARATOR = "."

# Algorithm identifier -> hash name.  Identifiers are case-sensitive.
MAC_ALGORITHMS: Dict[str, str] = {
    "HS256": "sha256",
    "HS384": "sha384",
    "HS512": "sha512",
}

SIGNATURE_ALGORITHMS: Dict[str, str] = {
    "RS256": "sha256",
    "RS384": "sha384",
    "RS512": "sha512",
}

SUPPORTED_ALGORITHMS = tuple(MAC_ALGORITHMS) + tuple(SIGNATURE_ALGORITHMS)
