"""
Chain address derivation.

An address is the prefix ``oct`` followed by the base58 encoding of the
SHA-256 digest of a raw 32-byte Ed25519 public key.
"""

from __future__ import annotations

import hashlib

import base58

from octrakit.common.config import Config
from octrakit.common.exceptions import InvalidAddressError, InvalidKeyLengthError


def derive_address(public_key: bytes) -> str:
    """Derive the address owned by a raw public key."""
    if len(public_key) != Config.PUBLIC_KEY_LENGTH:
        msg = (
            f"Public key must be {Config.PUBLIC_KEY_LENGTH} bytes, "
            f"got {len(public_key)}"
        )
        raise InvalidKeyLengthError(msg)
    digest = hashlib.sha256(public_key).digest()
    return Config.ADDRESS_PREFIX + base58.b58encode(digest).decode("ascii")


def validate_address(address: str) -> str:
    """Check that ``address`` is a prefixed base58 SHA-256 digest and return it."""
    if not address.startswith(Config.ADDRESS_PREFIX):
        msg = f"Address must start with {Config.ADDRESS_PREFIX!r}: {address!r}"
        raise InvalidAddressError(msg)
    body = address[len(Config.ADDRESS_PREFIX) :]
    try:
        decoded = base58.b58decode(body)
    except ValueError as err:
        msg = f"Address is not base58 encoded: {address!r}"
        raise InvalidAddressError(msg) from err
    if len(decoded) != hashlib.sha256().digest_size:
        msg = f"Address decodes to {len(decoded)} bytes, expected 32: {address!r}"
        raise InvalidAddressError(msg)
    return address


def is_valid_address(address: str) -> bool:
    try:
        validate_address(address)
    except InvalidAddressError:
        return False
    return True
