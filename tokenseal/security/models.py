"""Header and decoded token models."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field

from ..constants import TOKEN_TYPE


class TokenHeader(BaseModel):
    """Header written by the codec.  ``typ`` is serialized first."""

    typ: str = TOKEN_TYPE
    alg: str


class DecodedToken(BaseModel):
    """All three parts of a decoded token."""

    header: Dict[str, Any] = Field(default_factory=dict)
    payload: Dict[str, Any] = Field(default_factory=dict)
    signature: str = Field(default="", description="Signature segment as found in the token")
    verified: bool = Field(default=False, description="Whether the signature was checked")

    @property
    def algorithm(self) -> Any:
        return self.header.get("alg")
