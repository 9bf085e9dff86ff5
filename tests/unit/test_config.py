"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from tokenseal.config import TokensealConfig, load_config
from tokenseal.exceptions import KeyUnavailable
from tokenseal.security import get_codec


def test_defaults_without_config_file():
    config = load_config()
    assert config.default_algorithm == "HS256"
    assert config.keys.secret is None
    assert config.log_level == "WARNING"


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "tokenseal.yaml"
    config_path.write_text(
        """
default_algorithm: HS512
keys:
  secret: c2VjcmV0
  secret_encoding: base64
"""
    )
    monkeypatch.setenv("TOKENSEAL_CONFIG", str(config_path))

    config = load_config()
    assert config.default_algorithm == "HS512"
    assert config.keys.secret_bytes() == b"secret"


def test_explicit_path_wins(tmp_path):
    config_path = tmp_path / "other.yaml"
    config_path.write_text("default_algorithm: HS384\n")

    assert load_config(str(config_path)).default_algorithm == "HS384"


def test_env_overrides(tmp_path, monkeypatch):
    config_path = tmp_path / "tokenseal.yaml"
    config_path.write_text("keys:\n  secret: from-file\n")
    monkeypatch.setenv("TOKENSEAL_CONFIG", str(config_path))
    monkeypatch.setenv("TOKENSEAL_SECRET", "from-env")
    monkeypatch.setenv("TOKENSEAL_PRIVATE_KEY", "/keys/private.pem")
    monkeypatch.setenv("TOKENSEAL_PUBLIC_KEY", "/keys/public.pem")
    monkeypatch.setenv("TOKENSEAL_DEFAULT_ALG", "RS256")
    monkeypatch.setenv("TOKENSEAL_LOG_LEVEL", "DEBUG")

    config = load_config()
    assert config.keys.secret == "from-env"
    assert config.keys.private_key_path == "/keys/private.pem"
    assert config.keys.public_key_path == "/keys/public.pem"
    assert config.default_algorithm == "RS256"
    assert config.log_level == "DEBUG"


def test_unknown_default_algorithm_is_rejected(monkeypatch):
    with pytest.raises(ValidationError):
        TokensealConfig(default_algorithm="none")
    monkeypatch.setenv("TOKENSEAL_DEFAULT_ALG", "hs256")
    with pytest.raises(ValidationError):
        load_config()


def test_configs_do_not_share_key_settings():
    first = TokensealConfig()
    first.keys.secret = "mine"
    assert TokensealConfig().keys.secret is None


def test_get_codec_uses_config(tmp_path, monkeypatch, rsa_keys):
    private_pem, _ = rsa_keys
    key_path = tmp_path / "private.pem"
    key_path.write_bytes(private_pem)
    monkeypatch.setenv("TOKENSEAL_SECRET", "secret")
    monkeypatch.setenv("TOKENSEAL_PRIVATE_KEY", str(key_path))
    monkeypatch.setenv("TOKENSEAL_DEFAULT_ALG", "RS384")

    codec = get_codec()
    assert codec.registry.algorithms == ["HS256", "HS384", "HS512", "RS256", "RS384", "RS512"]
    token = codec.encode({"sub": "alice"})
    assert codec.decode_header(token)["alg"] == "RS384"
    assert codec.decode(token) == {"sub": "alice"}


def test_get_codec_with_missing_key_file_skips_rsa(tmp_path, monkeypatch):
    monkeypatch.setenv("TOKENSEAL_SECRET", "secret")
    monkeypatch.setenv("TOKENSEAL_PRIVATE_KEY", str(tmp_path / "absent.pem"))

    codec = get_codec()
    assert codec.registry.algorithms == ["HS256", "HS384", "HS512"]
    assert "cannot read key file" in codec.registry.unavailable["RS256"]


def test_invalid_base64_secret_is_key_unavailable(tmp_path, monkeypatch):
    config_path = tmp_path / "tokenseal.yaml"
    config_path.write_text("keys:\n  secret: 'abc'\n  secret_encoding: base64\n")
    monkeypatch.setenv("TOKENSEAL_CONFIG", str(config_path))

    config = load_config()
    with pytest.raises(KeyUnavailable):
        config.keys.secret_bytes()
    with pytest.raises(KeyUnavailable):
        get_codec(config)
