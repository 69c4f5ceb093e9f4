"""RSA signing key loading from PEM files and streams."""

import logging
import os
from typing import IO

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from appjwt.crypto.errors import KeyLoadError

logger = logging.getLogger(__name__)

KeySource = str | os.PathLike[str] | bytes | IO[bytes] | IO[str]


def read_key_bytes(source: KeySource) -> bytes:
    """Read raw key material from a path, a readable stream, or bytes.

    Files are opened and closed here. Streams belong to the caller and are
    left open.
    """
    if isinstance(source, bytes):
        return source
    if hasattr(source, "read"):
        try:
            data = source.read()
            if isinstance(data, str):
                data = data.encode()
        except (OSError, ValueError) as exc:
            raise KeyLoadError(f"could not read private key stream: {exc}") from exc
        logger.debug("Read %d bytes of key material from stream", len(data))
        return data
    try:
        with open(source, "rb") as key_file:
            data = key_file.read()
    except (OSError, ValueError) as exc:
        raise KeyLoadError(
            f"could not read private key file {os.fspath(source)!r}: {exc}"
        ) from exc
    logger.debug("Read private key file %s", os.fspath(source))
    return data


def load_signing_key(source: KeySource) -> RSAPrivateKey:
    """Parse an unencrypted PEM-encoded RSA private key."""
    data = read_key_bytes(source)
    if not data.strip():
        raise KeyLoadError("private key source is empty")
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except TypeError as exc:
        raise KeyLoadError(
            "private key is passphrase-protected, which is not supported"
        ) from exc
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise KeyLoadError(f"could not parse private key: {exc}") from exc
    if not isinstance(key, RSAPrivateKey):
        raise KeyLoadError(
            f"expected an RSA private key, got {type(key).__name__}"
        )
    logger.debug("Loaded %d-bit RSA signing key", key.key_size)
    return key
