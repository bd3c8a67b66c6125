"""
Application layer: Transfer use cases.
"""

from __future__ import annotations

import logging
import threading
import time
from decimal import Decimal
from typing import TYPE_CHECKING, Callable

from octrakit.client.application.waiter import ConfirmationWaiter
from octrakit.client.domain.entities import TransferResult
from octrakit.common.exceptions import InsufficientBalanceError
from octrakit.common.models import SignedTransaction, TransferInstruction
from octrakit.wallet.address import validate_address
from octrakit.wallet.amount import to_atoms
from octrakit.wallet.transaction import sign_transaction

if TYPE_CHECKING:
    from octrakit.common.interfaces import ILedgerGateway
    from octrakit.wallet.keys import KeyMaterial

logger = logging.getLogger(__name__)


class TransferService:
    """Builds, signs, submits and optionally waits for transfers."""

    def __init__(
        self,
        gateway: ILedgerGateway,
        poll_interval: float,
        confirm_timeout: float,
        time_provider: Callable[[], float] = time.time,
    ):
        self.gateway = gateway
        self.poll_interval = poll_interval
        self.confirm_timeout = confirm_timeout
        self._time_provider = time_provider

    def prepare(
        self,
        key: KeyMaterial,
        to: str,
        amount: float | int | str | Decimal,
        message: str | None = None,
        ou: str = "",
    ) -> SignedTransaction:
        """Sign a transfer of ``amount`` display units using the next nonce.

        Raises:
            InvalidAddressError: ``to`` is not a chain address
            InsufficientBalanceError: ``amount`` exceeds the sender's balance
        """
        validate_address(to)
        atoms = to_atoms(amount)
        balance = self.gateway.get_balance(key.address)
        if atoms > balance.balance_raw:
            raise InsufficientBalanceError(atoms, balance.balance_raw)

        instruction = TransferInstruction(
            from_=key.address,
            to_=to,
            amount=str(atoms),
            nonce=balance.nonce + 1,
            ou=ou,
            timestamp=repr(self._time_provider()),
            message=message,
        )
        signed = sign_transaction(instruction, key)
        logger.debug("Canonical payload: %s", signed.raw)
        return signed

    def submit(
        self,
        signed_tx: SignedTransaction,
        *,
        wait: bool = True,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> TransferResult:
        """Submit once and, if ``wait``, block until a terminal wait state."""
        receipt = self.gateway.submit(signed_tx)
        result = TransferResult(tx_hash=receipt.tx_hash, signed=signed_tx)
        if wait:
            result.outcome = self.waiter(receipt.tx_hash, timeout, cancel_event).run()
        return result

    def waiter(
        self,
        tx_hash: str,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ConfirmationWaiter:
        return ConfirmationWaiter(
            self.gateway,
            tx_hash,
            poll_interval=self.poll_interval,
            timeout=timeout if timeout is not None else self.confirm_timeout,
            cancel_event=cancel_event,
        )

    def send(
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
        signed = self.prepare(key, to, amount, message=message)
        logger.info(
            "Sending %s atoms from %s to %s (nonce %s)",
            signed.tx.amount,
            key.address,
            to,
            signed.tx.nonce,
        )
        return self.submit(signed, wait=wait, timeout=timeout, cancel_event=cancel_event)
