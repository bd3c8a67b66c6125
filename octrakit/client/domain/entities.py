"""Domain layer: Core business entities and rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from octrakit.common.models import SignedTransaction


class WaitState(Enum):
    """States of a confirmation wait."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not WaitState.PENDING


@dataclass
class WaitOutcome:
    """Domain entity representing the end of a confirmation wait."""

    state: WaitState
    tx_hash: str
    record: dict[str, Any] | None = None
    polls: int = 0


@dataclass
class TransferResult:
    """Domain entity representing a submitted transfer."""

    tx_hash: str
    signed: SignedTransaction
    outcome: WaitOutcome | None = None

    @property
    def confirmed(self) -> bool:
        return self.outcome is not None and self.outcome.state is WaitState.CONFIRMED


@dataclass(frozen=True)
class HistoryEntry:
    """A resolved transaction from an address's recent history."""

    hash: str
    epoch: int | None
    from_: str
    to: str
    amount: str
    timestamp: str
    status: str = "confirmed"

    def is_outbound(self, address: str) -> bool:
        return self.from_.lower() == address.lower()


@dataclass
class WalletStats:
    """Client-side aggregate over recent history. Not authoritative."""

    total_in: int = 0
    total_out: int = 0
    tx_count: int = 0
