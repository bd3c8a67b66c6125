"""
Ledger client facade.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from octrakit.client.application.history import HistoryService
from octrakit.client.application.transfer import TransferService
from octrakit.client.domain.entities import WaitState
from octrakit.client.infrastructure.config_loader import ConfigLoader
from octrakit.client.infrastructure.gateway import LedgerGateway
from octrakit.common.exceptions import ConfirmationTimeoutError, WaitCancelledError
from octrakit.common.models import ClientConfig

if TYPE_CHECKING:
    import threading

    from octrakit.client.domain.entities import (
        HistoryEntry,
        TransferResult,
        WalletStats,
    )
    from octrakit.common.interfaces import ILedgerGateway, ITransport
    from octrakit.common.models import BalanceInfo, SignedTransaction, SubmitReceipt
    from octrakit.wallet.keys import KeyMaterial


class OctraClient:
    """Client for balance lookups, transfers, confirmation and history.

    The transport is whatever ``session`` is passed in (a fresh
    ``requests.Session`` otherwise); no state is shared between clients.
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        *,
        session: ITransport | None = None,
        gateway: ILedgerGateway | None = None,
        connect_timeout: float | None = None,
        poll_interval: float | None = None,
        confirm_timeout: float | None = None,
        log_level: int | None = None,
    ):
        client_config = ClientConfig(
            rpc_url=rpc_url,
            connect_timeout=connect_timeout,
            poll_interval=poll_interval,
            confirm_timeout=confirm_timeout,
            log_level=log_level,
        )
        self._config_loader = ConfigLoader(client_config)
        self.rpc_url = self._config_loader.rpc_url
        self.connect_timeout = self._config_loader.connect_timeout
        self.poll_interval = self._config_loader.poll_interval
        self.confirm_timeout = self._config_loader.confirm_timeout
        self.logger = logging.getLogger(__name__)

        self.gateway: ILedgerGateway = gateway or LedgerGateway(
            self.rpc_url, session=session, connect_timeout=self.connect_timeout
        )
        self.transfers = TransferService(
            self.gateway, self.poll_interval, self.confirm_timeout
        )
        self.history = HistoryService(
            self.gateway, self._config_loader.config.HISTORY_LIMIT
        )

    def close(self) -> None:
        """Release the gateway's transport if the gateway owns one."""
        close = getattr(self.gateway, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> OctraClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_balance(self, address: str) -> BalanceInfo:
        return self.gateway.get_balance(address)

    def get_next_nonce(self, address: str) -> int:
        return self.gateway.get_next_nonce(address)

    def send_transaction(self, signed_tx: SignedTransaction) -> SubmitReceipt:
        return self.gateway.submit(signed_tx)

    def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        return self.gateway.get_transaction(tx_hash)

    def wait_transaction(
        self,
        tx_hash: str,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> dict[str, Any]:
        """Block until ``tx_hash`` is confirmed and return the node's record.

        Raises:
            ConfirmationTimeoutError: the deadline passed first
            WaitCancelledError: ``cancel_event`` was set
        """
        outcome = self.transfers.waiter(tx_hash, timeout, cancel_event).run()
        if outcome.state is WaitState.CANCELLED:
            msg = f"Wait for {tx_hash} cancelled"
            raise WaitCancelledError(msg)
        if outcome.state is WaitState.TIMED_OUT or outcome.record is None:
            msg = f"Transaction {tx_hash} not confirmed after {outcome.polls} polls"
            raise ConfirmationTimeoutError(msg)
        return outcome.record

    def transfer(
        self,
        key: KeyMaterial,
        to: str,
        amount: float | int | str | Decimal,
        message: str | None = None,
        *,
        wait: bool = True,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> TransferResult:
        """Send ``amount`` display units from ``key`` to ``to``."""
        return self.transfers.send(
            key,
            to,
            amount,
            message,
            wait=wait,
            timeout=timeout,
            cancel_event=cancel_event,
        )

    def get_history(self, address: str, limit: int = 10) -> list[HistoryEntry]:
        """Best-effort recent history; unresolvable entries are skipped."""
        return self.history.get_history(address, limit)

    def get_stats(self, address: str) -> WalletStats:
        return self.history.get_stats(address)
