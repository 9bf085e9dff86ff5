import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from tokenseal.security import AlgorithmRegistry, StaticKeyProvider, TokenCodec


def generate_rsa_pem():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_keys():
    return generate_rsa_pem()


@pytest.fixture(scope="session")
def other_rsa_keys():
    return generate_rsa_pem()


@pytest.fixture
def codec(rsa_keys):
    private_pem, _ = rsa_keys
    registry = AlgorithmRegistry(StaticKeyProvider(secret="secret", private_key=private_pem))
    return TokenCodec(registry)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("TOKENSEAL_CONFIG", str(tmp_path / "missing.yaml"))
    for name in (
        "TOKENSEAL_SECRET",
        "TOKENSEAL_PRIVATE_KEY",
        "TOKENSEAL_PUBLIC_KEY",
        "TOKENSEAL_DEFAULT_ALG",
        "TOKENSEAL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
