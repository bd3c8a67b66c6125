"""
Configuration settings for the Octra wallet client.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


class Config:
    """Central configuration class for all client settings."""

    # Protocol constants
    ADDRESS_PREFIX: str = "oct"
    UNIT_DECIMALS: int = 6
    ATOMS_PER_UNIT: int = 10**UNIT_DECIMALS
    DEFAULT_OU: str = "1000"
    MAX_NONCE: int = 2**64 - 1

    # Key material sizes
    SEED_LENGTH: int = 32
    PUBLIC_KEY_LENGTH: int = 32
    SIGNATURE_LENGTH: int = 64

    # Keystore format (fixed, any change breaks existing keystore files)
    KEYSTORE_CIPHER: str = "aes-256-gcm"
    SCRYPT_N: int = 32768
    SCRYPT_R: int = 8
    SCRYPT_P: int = 1
    KEY_LENGTH: int = 32
    SALT_LENGTH: int = 16
    GCM_NONCE_LENGTH: int = 12

    def __init__(self) -> None:
        # Node settings
        self.RPC_URL: str = os.getenv("OCTRA_RPC_URL", "https://octra.network")

        # Timing settings (seconds)
        self.CONNECT_TIMEOUT: float = 30  # Per-request transport timeout
        self.POLL_INTERVAL: float = 2  # Between confirmation lookups
        self.CONFIRM_TIMEOUT: float = 120  # Overall confirmation deadline

        # History
        self.HISTORY_LIMIT: int = 50  # Transactions considered by stats

        # File paths
        self.KEYSTORE_PATH: Path = Path(os.getenv("OCTRA_KEYSTORE", "wallet.json"))

        # Logging
        self.LOG_LEVEL: int = logging.INFO
