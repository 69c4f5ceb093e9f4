"""Shared test fixtures for appjwt."""

from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import (
    RSAPrivateKey,
    RSAPublicKey,
)

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep APPJWT_* variables from the host out of settings resolution."""
    for name in (
        "APPJWT_PRIVATE_KEY_FILE",
        "APPJWT_ISSUER_ID",
        "APPJWT_LIFETIME_SECONDS",
        "APPJWT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def private_key() -> RSAPrivateKey:
    """Generate one RSA-2048 signing key for the whole session."""
    return rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )


@pytest.fixture(scope="session")
def public_key(private_key: RSAPrivateKey) -> RSAPublicKey:
    return private_key.public_key()


@pytest.fixture(scope="session")
def private_pem(private_key: RSAPrivateKey) -> bytes:
    """PKCS#1 PEM, the format GitHub hands out for app keys."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture
def key_file(tmp_path: Path, private_pem: bytes) -> Path:
    """Write the session key to a PEM file."""
    path = tmp_path / "app.private-key.pem"
    path.write_bytes(private_pem)
    return path
