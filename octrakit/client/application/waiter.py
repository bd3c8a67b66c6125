"""
Application layer: Waiting for a submitted transaction to settle.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any, Callable

from octrakit.client.domain.entities import WaitOutcome, WaitState
from octrakit.common.exceptions import RejectedError, TransportFailureError
from octrakit.common.models import TransactionStatus

if TYPE_CHECKING:
    from octrakit.common.interfaces import ILedgerGateway

logger = logging.getLogger(__name__)


class ConfirmationWaiter:
    """Polls a node until a transaction is confirmed, times out or is cancelled.

    The wait sleeps on the cancellation event, so ``cancel()`` (or setting
    the event passed in) ends it without waiting for the next poll. Lookup
    errors count as "not confirmed yet".
    """

    def __init__(
        self,
        gateway: ILedgerGateway,
        tx_hash: str,
        poll_interval: float,
        timeout: float,
        cancel_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.gateway = gateway
        self.tx_hash = tx_hash
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._cancel_event = cancel_event or threading.Event()
        self._clock = clock
        self.state = WaitState.PENDING
        self.polls = 0
        self.deadline: float | None = None

    def cancel(self) -> None:
        """Ask a running (or future) wait to stop."""
        self._cancel_event.set()

    def run(self) -> WaitOutcome:
        """Block until a terminal state is reached."""
        if self.state.is_terminal:
            msg = f"Wait for {self.tx_hash} already finished: {self.state.value}"
            raise RuntimeError(msg)

        self.deadline = self._clock() + self.timeout
        logger.info("Waiting for confirmation of %s", self.tx_hash)

        while True:
            if self._cancel_event.is_set():
                return self._finish(WaitState.CANCELLED)

            remaining = max(self.deadline - self._clock(), 0.0)
            if self._cancel_event.wait(min(self.poll_interval, remaining)):
                return self._finish(WaitState.CANCELLED)

            if self._clock() >= self.deadline:
                return self._finish(WaitState.TIMED_OUT)

            record = self._poll()
            if self._cancel_event.is_set():
                return self._finish(WaitState.CANCELLED)
            if record is not None and self._is_confirmed(record):
                return self._finish(WaitState.CONFIRMED, record)

    def _poll(self) -> dict[str, Any] | None:
        self.polls += 1
        try:
            return self.gateway.get_transaction(self.tx_hash)
        except (TransportFailureError, RejectedError) as err:
            logger.debug("Lookup of %s failed, still pending: %s", self.tx_hash, err)
            return None

    @staticmethod
    def _is_confirmed(record: dict[str, Any]) -> bool:
        return TransactionStatus.model_validate(record).is_confirmed

    def _finish(
        self, state: WaitState, record: dict[str, Any] | None = None
    ) -> WaitOutcome:
        self.state = state
        logger.info(
            "Wait for %s ended: %s after %s polls", self.tx_hash, state.value, self.polls
        )
        return WaitOutcome(state=state, tx_hash=self.tx_hash, record=record, polls=self.polls)
