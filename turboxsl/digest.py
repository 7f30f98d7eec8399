"""MD5 signatures and their hexadecimal form."""

from __future__ import annotations

import hashlib
from typing import Optional, Union

MD5_SIZE = 16
HEX_DIGITS = "0123456789abcdef"


def md5_digest(data: Union[bytes, bytearray, str]) -> bytes:
    """Return the 16-byte MD5 signature of ``data`` (text is UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(bytes(data)).digest()


def signature_to_string(signature: bytes) -> str:
    """Return the lower-case hexadecimal form of a 16-byte signature."""
    if len(signature) < MD5_SIZE:
        raise ValueError(f"signature must hold {MD5_SIZE} bytes")
    return bytes(signature[:MD5_SIZE]).hex()


def signature_from_string(text: str) -> bytes:
    """Read a signature back from the first 32 hexadecimal digits of ``text``."""
    digits = text[: MD5_SIZE * 2]
    if len(digits) < MD5_SIZE * 2:
        raise ValueError(f"signature text must hold {MD5_SIZE * 2} digits")
    bad = next((c for c in digits if c not in HEX_DIGITS), None)
    if bad is not None:
        raise ValueError(f"invalid hexadecimal digit {bad!r}")
    return bytes.fromhex(digits)


def md5_hex(*args: Optional[str]) -> str:
    """Concatenate the given strings, skipping ``None``, and return their MD5 in hex."""
    message = "".join(arg for arg in args if arg is not None)
    return signature_to_string(md5_digest(message))