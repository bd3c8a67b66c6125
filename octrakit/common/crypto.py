"""Common cryptographic utilities.
"""

from __future__ import annotations

import base64
import binascii
import secrets
from typing import Callable

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from octrakit.common.config import Config
from octrakit.common.exceptions import EntropyUnavailableError


class CryptoUtils:
    """Utility class for cryptographic operations."""

    @staticmethod
    def derive_keystore_key(password: str, salt: bytes) -> bytes:
        """Derive the keystore encryption key from a password."""
        return Scrypt(
            salt=salt,
            length=Config.KEY_LENGTH,
            n=Config.SCRYPT_N,
            r=Config.SCRYPT_R,
            p=Config.SCRYPT_P,
        ).derive(password.encode("utf-8"))

    @staticmethod
    def b64encode(value: bytes) -> str:
        """Encode bytes as standard padded base64 text."""
        return base64.b64encode(value).decode("ascii")

    @staticmethod
    def b64decode(value: str) -> bytes:
        """Decode standard base64 text, rejecting stray characters."""
        try:
            return base64.b64decode(value.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as err:
            msg = "Invalid base64 data"
            raise ValueError(msg) from err

    @staticmethod
    def random_bytes(
        length: int, provider: Callable[[int], bytes] | None = None
    ) -> bytes:
        """Draw ``length`` bytes from ``provider`` (the OS CSPRNG by default)."""
        try:
            value = (provider or secrets.token_bytes)(length)
        except (NotImplementedError, OSError) as err:
            msg = "Secure random source is unavailable"
            raise EntropyUnavailableError(msg) from err
        if len(value) != length:
            msg = "Secure random source returned a short read"
            raise EntropyUnavailableError(msg)
        return value
