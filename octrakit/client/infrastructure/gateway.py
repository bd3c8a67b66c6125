"""
Infrastructure layer: HTTP exchange with a ledger node.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests
from pydantic import ValidationError

from octrakit.common.config import Config
from octrakit.common.exceptions import RejectedError, TransportFailureError
from octrakit.common.models import (
    BalanceInfo,
    RecentTransactions,
    SignedTransaction,
    SubmitReceipt,
    TransactionRef,
)
from octrakit.wallet.transaction import to_broadcast_form

if TYPE_CHECKING:
    from octrakit.common.interfaces import IResponse, ITransport

HTTP_ERROR_MIN = 400

logger = logging.getLogger(__name__)


class LedgerGateway:
    """Ledger node operations over an explicitly passed transport.

    Each call is bounded by ``connect_timeout``. Nothing is retried here;
    resubmitting a transfer is the caller's decision.
    """

    def __init__(
        self,
        base_url: str,
        session: ITransport | None = None,
        connect_timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_session = session is None
        self.session: ITransport = session if session is not None else requests.Session()
        self.connect_timeout = connect_timeout or Config().CONNECT_TIMEOUT

    def close(self) -> None:
        """Close the session if this gateway created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> LedgerGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> IResponse:
        url = f"{self.base_url}{path}"
        try:
            r: IResponse = self.session.request(
                method, url, params=params, json=body, timeout=self.connect_timeout
            )
        except requests.RequestException as err:
            msg = f"{method} {path} failed: {err}"
            raise TransportFailureError(msg) from err

        if r.status_code >= HTTP_ERROR_MIN:
            logger.warning("%s %s rejected with status %s", method, path, r.status_code)
            raise RejectedError(r.text, r.status_code)
        return r

    @staticmethod
    def _decode(r: IResponse, method: str, path: str) -> Any:
        try:
            return r.json()
        except ValueError as err:
            msg = f"{method} {path} returned a non-JSON body"
            raise TransportFailureError(msg) from err

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        return self._decode(
            self._send(method, path, params=params, body=body), method, path
        )

    def get_balance(self, address: str) -> BalanceInfo:
        """Fetch balance and last used nonce of ``address``."""
        data = self._request("GET", f"/balance/{address}")
        try:
            return BalanceInfo.model_validate(data)
        except ValidationError as err:
            msg = f"Malformed balance response for {address}"
            raise TransportFailureError(msg) from err

    def get_next_nonce(self, address: str) -> int:
        """Nonce for the next transfer: last used nonce plus one."""
        return self.get_balance(address).nonce + 1

    def submit(self, signed_tx: SignedTransaction) -> SubmitReceipt:
        """Broadcast a signed transaction once."""
        r = self._send("POST", "/send-tx", body=to_broadcast_form(signed_tx))
        data = self._decode(r, "POST", "/send-tx")
        try:
            receipt = SubmitReceipt.model_validate(data)
        except ValidationError as err:
            # The node answered but did not accept the transaction.
            raise RejectedError(r.text, r.status_code) from err
        logger.info("Transaction submitted: %s", receipt.tx_hash)
        return receipt

    def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        """Fetch the node's record of ``tx_hash`` as an opaque mapping."""
        data = self._request("GET", f"/tx/{tx_hash}")
        if not isinstance(data, dict):
            msg = f"Malformed transaction response for {tx_hash}"
            raise TransportFailureError(msg)
        return data

    def get_recent_transactions(self, address: str, limit: int) -> list[TransactionRef]:
        """Fetch references to the most recent transactions of ``address``."""
        data = self._request("GET", f"/address/{address}", params={"limit": limit})
        try:
            return RecentTransactions.model_validate(data).recent_transactions
        except ValidationError as err:
            msg = f"Malformed history response for {address}"
            raise TransportFailureError(msg) from err
