"""
Ed25519 key material held in memory.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from octrakit.common.config import Config
from octrakit.common.crypto import CryptoUtils
from octrakit.common.exceptions import InvalidInputError, InvalidSeedLengthError
from octrakit.wallet.address import derive_address

logger = logging.getLogger(__name__)


class KeyPair(NamedTuple):
    address: str
    public_key: bytes
    seed: bytes


class KeyMaterial:
    """An Ed25519 seed and the public key expanded from it.

    The public key is always computed from the seed; there is no way to
    pair a seed with an independently supplied key.
    """

    __slots__ = ("_private_key", "_seed", "address", "public_key")

    def __init__(self, seed: bytes) -> None:
        if len(seed) != Config.SEED_LENGTH:
            msg = f"Seed must be {Config.SEED_LENGTH} bytes, got {len(seed)}"
            raise InvalidSeedLengthError(msg)
        self._seed = bytes(seed)
        self._private_key = Ed25519PrivateKey.from_private_bytes(self._seed)
        self.public_key: bytes = self._private_key.public_key().public_bytes(
            serialization.Encoding.Raw,
            serialization.PublicFormat.Raw,
        )
        self.address: str = derive_address(self.public_key)

    def __repr__(self) -> str:
        return f"KeyMaterial(address={self.address!r})"

    @classmethod
    def generate(
        cls, entropy_provider: Callable[[int], bytes] | None = None
    ) -> KeyMaterial:
        """Create fresh key material from a secure random source."""
        key = cls(CryptoUtils.random_bytes(Config.SEED_LENGTH, entropy_provider))
        logger.debug("Generated key material for %s", key.address)
        return key

    @classmethod
    def from_seed(cls, seed: bytes) -> KeyMaterial:
        return cls(seed)

    @classmethod
    def from_seed_b64(cls, seed_b64: str) -> KeyMaterial:
        """Import key material from a base64 encoded seed."""
        try:
            seed = CryptoUtils.b64decode(seed_b64)
        except ValueError as err:
            msg = "Seed is not valid base64"
            raise InvalidInputError(msg) from err
        return cls(seed)

    @property
    def seed(self) -> bytes:
        return self._seed

    @property
    def seed_b64(self) -> str:
        return CryptoUtils.b64encode(self._seed)

    @property
    def public_key_b64(self) -> str:
        return CryptoUtils.b64encode(self.public_key)

    def as_key_pair(self) -> KeyPair:
        return KeyPair(self.address, self.public_key, self._seed)

    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` with pure Ed25519 (64-byte signature)."""
        return self._private_key.sign(message)


def generate_key_pair(
    entropy_provider: Callable[[int], bytes] | None = None,
) -> KeyPair:
    return KeyMaterial.generate(entropy_provider).as_key_pair()


def key_pair_from_seed(seed: bytes) -> KeyPair:
    return KeyMaterial(seed).as_key_pair()


def sign(seed: bytes, message: bytes) -> bytes:
    return KeyMaterial(seed).sign(message)
