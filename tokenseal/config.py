from __future__ import annotations

import base64
import binascii
import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS
from .exceptions import KeyUnavailable


class KeyConfig(BaseModel):
    """Key material locations."""

    secret: Optional[str] = None
    secret_encoding: Literal["utf-8", "base64"] = "utf-8"
    private_key_path: Optional[str] = None
    public_key_path: Optional[str] = None
    private_key_password: Optional[str] = None

    def secret_bytes(self) -> Optional[bytes]:
        """Return the shared secret decoded according to ``secret_encoding``."""
        if self.secret is None:
            return None
        if self.secret_encoding == "base64":
            try:
                return base64.b64decode(self.secret, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise KeyUnavailable(f"secret is not valid base64: {exc}") from exc
        return self.secret.encode("utf-8")


class TokensealConfig(BaseModel):
    """Top-level configuration model."""

    model_config = ConfigDict(validate_assignment=True)

    default_algorithm: str = DEFAULT_ALGORITHM
    log_level: str = "WARNING"
    keys: KeyConfig = Field(default_factory=KeyConfig)

    @field_validator("default_algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        if value not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"default_algorithm must be one of {', '.join(SUPPORTED_ALGORITHMS)}"
            )
        return value


def load_config(path: Optional[str] = None) -> TokensealConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to TOKENSEAL_CONFIG env
            variable or 'tokenseal.yaml' in the current directory.
    """

    config_path = path or os.getenv("TOKENSEAL_CONFIG", "tokenseal.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = TokensealConfig(**data)
    else:
        config = TokensealConfig()

    env_secret = os.getenv("TOKENSEAL_SECRET")
    if env_secret:
        config.keys.secret = env_secret
    env_private = os.getenv("TOKENSEAL_PRIVATE_KEY")
    if env_private:
        config.keys.private_key_path = env_private
    env_public = os.getenv("TOKENSEAL_PUBLIC_KEY")
    if env_public:
        config.keys.public_key_path = env_public
    env_alg = os.getenv("TOKENSEAL_DEFAULT_ALG")
    if env_alg:
        config.default_algorithm = env_alg
    env_level = os.getenv("TOKENSEAL_LOG_LEVEL")
    if env_level:
        config.log_level = env_level
    return config
