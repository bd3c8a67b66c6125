"""
Custom exceptions for the wallet client.
"""

from __future__ import annotations


class OctraError(Exception):
    """Base exception for all wallet and ledger failures."""


class InvalidInputError(OctraError, ValueError):
    """Exception for malformed keys, seeds, addresses or amounts."""


class InvalidKeyLengthError(InvalidInputError):
    """Exception for public keys of the wrong size."""


class InvalidSeedLengthError(InvalidInputError):
    """Exception for seeds of the wrong size."""


class InvalidAddressError(InvalidInputError):
    """Exception for addresses that cannot belong to any public key."""


class InsufficientBalanceError(InvalidInputError):
    """Exception for transfers larger than the sender's balance."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient balance: requested {requested} atoms, available {available}"
        )
        self.requested = requested
        self.available = available


class EntropyUnavailableError(OctraError):
    """Exception for a secure random source that cannot supply bytes."""


class CryptoFailureError(OctraError):
    """Exception for failed authentication checks."""


class InvalidPasswordError(CryptoFailureError):
    """Exception for keystores that cannot be opened.

    Raised for a wrong password and for a corrupted record alike.
    """

    def __init__(self) -> None:
        super().__init__("invalid password")


class TransportFailureError(OctraError):
    """Exception for network errors and unreadable node responses."""


class RejectedError(OctraError):
    """Exception for requests the ledger node refused."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        if status_code is None:
            message = f"rpc error: {reason}"
        else:
            message = f"rpc error [{status_code}]: {reason}"
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code


class ConfirmationTimeoutError(OctraError):
    """Exception for transactions not confirmed before the deadline."""


class WaitCancelledError(OctraError):
    """Exception for confirmation waits aborted by the caller."""
