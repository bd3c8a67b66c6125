"""
Password protected keystore for Ed25519 seeds.

The seed is sealed with AES-256-GCM under a key derived by scrypt
(N=32768, r=8, p=1) from the password and a random 16-byte salt. The GCM
tag is the only password check, so a wrong password and a damaged record
fail the same way.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from pydantic import ValidationError

from octrakit.common.config import Config
from octrakit.common.crypto import CryptoUtils
from octrakit.common.exceptions import (
    InvalidInputError,
    InvalidPasswordError,
    InvalidSeedLengthError,
)
from octrakit.common.models import KeystoreCrypto, KeystoreRecord
from octrakit.wallet.keys import KeyMaterial

logger = logging.getLogger(__name__)


def encrypt_seed(
    seed: bytes,
    password: str,
    *,
    random_provider: Callable[[int], bytes] | None = None,
) -> KeystoreRecord:
    """Seal ``seed`` into a keystore record. Every call draws a new salt and nonce."""
    key_material = KeyMaterial(seed)
    salt = CryptoUtils.random_bytes(Config.SALT_LENGTH, random_provider)
    nonce = CryptoUtils.random_bytes(Config.GCM_NONCE_LENGTH, random_provider)

    key = CryptoUtils.derive_keystore_key(password, salt)
    ciphertext = AESGCM(key).encrypt(nonce, key_material.seed, None)

    logger.debug("Encrypted keystore for %s", key_material.address)
    return KeystoreRecord(
        address=key_material.address,
        crypto=KeystoreCrypto(
            cipher=Config.KEYSTORE_CIPHER,
            ciphertext=CryptoUtils.b64encode(ciphertext),
            salt=CryptoUtils.b64encode(salt),
            nonce=CryptoUtils.b64encode(nonce),
        ),
    )


def decrypt_seed(record: KeystoreRecord, password: str) -> bytes:
    """Open a keystore record and return the 32-byte seed.

    Raises:
        InvalidPasswordError: wrong password or damaged record, including
            an unexpected cipher name
    """
    if record.crypto.cipher != Config.KEYSTORE_CIPHER:
        raise InvalidPasswordError

    try:
        salt = CryptoUtils.b64decode(record.crypto.salt)
        nonce = CryptoUtils.b64decode(record.crypto.nonce)
        ciphertext = CryptoUtils.b64decode(record.crypto.ciphertext)
        key = CryptoUtils.derive_keystore_key(password, salt)
        seed = AESGCM(key).decrypt(nonce, ciphertext, None)
    except (InvalidTag, ValueError) as err:
        raise InvalidPasswordError from err

    if len(seed) != Config.SEED_LENGTH:
        msg = f"Keystore holds {len(seed)} bytes, expected a {Config.SEED_LENGTH}-byte seed"
        raise InvalidSeedLengthError(msg)
    return seed


def unlock(record: KeystoreRecord, password: str) -> KeyMaterial:
    """Decrypt a record straight into key material."""
    return KeyMaterial(decrypt_seed(record, password))


def save_keystore(path: Path, record: KeystoreRecord) -> None:
    """Write a keystore record to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        f.write(record.to_json())
    logger.info("Keystore for %s saved to %s", record.address, path)


def load_keystore(path: Path) -> KeystoreRecord:
    """Read a keystore record from ``path``."""
    if not path.exists():
        msg = f"Keystore file not found: {path}"
        raise FileNotFoundError(msg)
    with path.open() as f:
        content = f.read()
    try:
        return KeystoreRecord.from_json(content)
    except ValidationError as err:
        msg = f"Invalid keystore file format in {path}"
        raise InvalidInputError(msg) from err
