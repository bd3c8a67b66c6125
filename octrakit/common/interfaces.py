"""
Interfaces and protocols for dependency injection.
"""

from __future__ import annotations

from typing import Any, Protocol

from octrakit.common.models import (
    BalanceInfo,
    SignedTransaction,
    SubmitReceipt,
    TransactionRef,
    TypedData,
)


class IResponse(Protocol):
    """Protocol for an HTTP response as returned by the transport."""

    status_code: int

    @property
    def text(self) -> str: ...

    def json(self) -> Any: ...


class ITransport(Protocol):
    """Protocol for the request/response exchange with a node.

    ``requests.Session`` satisfies it. Implementations must honour ``timeout``
    so that no call hangs indefinitely.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> IResponse: ...

    def close(self) -> None: ...


class ILedgerGateway(Protocol):
    """Protocol for ledger node operations."""

    def get_balance(self, address: str) -> BalanceInfo: ...

    def get_next_nonce(self, address: str) -> int: ...

    def submit(self, signed_tx: SignedTransaction) -> SubmitReceipt: ...

    def get_transaction(self, tx_hash: str) -> dict[str, Any]: ...

    def get_recent_transactions(
        self, address: str, limit: int
    ) -> list[TransactionRef]: ...


class ITypedDataSigner(Protocol):
    """Protocol for an external structured-data signing scheme."""

    def sign_typed_data(self, typed_data: TypedData, seed: bytes) -> str: ...


class ISignerRecovery(Protocol):
    """Optional companion of ITypedDataSigner that recovers the signer."""

    def signer_address(
        self, typed_data: TypedData, signature: str, public_key_b64: str
    ) -> str: ...
