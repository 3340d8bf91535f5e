"""Hash, HMAC and encoding primitives used by SigV4 signing."""

import base64
import hashlib
import hmac
from typing import Union

DIGEST_SIZE = hashlib.sha256().digest_size


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def hash_hex(value: Union[str, bytes]) -> str:
    """SHA-256 of value as 64 lowercase hex chars."""
    return hashlib.sha256(_to_bytes(value)).hexdigest()


def hmac_sha256(key: bytes, msg: Union[str, bytes]) -> bytes:
    """
    HMAC-SHA256 of msg under key.

    The key is taken as raw bytes of any length, so intermediate
    derivation keys (which may contain NUL bytes) pass through intact.

    Returns:
        32 byte digest
    """
    return hmac.new(key, _to_bytes(msg), hashlib.sha256).digest()


def hex_encode(digest: bytes) -> str:
    """Lowercase hex encoding."""
    return digest.hex()


def base64_encode(data: bytes) -> str:
    """Standard alphabet base64 with '=' padding and no line wrapping."""
    return base64.b64encode(data).decode("ascii")
