"""
Application layer: Transaction history and wallet statistics.

History is best-effort. A transaction whose lookup fails, or whose record
has no parsed transfer, is left out of the result instead of failing the
whole call. Only the initial reference lookup propagates errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from octrakit.client.domain.entities import HistoryEntry, WalletStats
from octrakit.common.exceptions import InvalidInputError, OctraError
from octrakit.common.models import TransactionRecord
from octrakit.wallet.amount import to_atoms

if TYPE_CHECKING:
    from octrakit.common.interfaces import ILedgerGateway

logger = logging.getLogger(__name__)


class HistoryService:
    """Resolves recent transactions of an address."""

    def __init__(self, gateway: ILedgerGateway, stats_limit: int):
        self.gateway = gateway
        self.stats_limit = stats_limit

    def get_history(self, address: str, limit: int) -> list[HistoryEntry]:
        refs = self.gateway.get_recent_transactions(address, limit)
        history: list[HistoryEntry] = []
        for ref in refs:
            try:
                record = TransactionRecord.model_validate(
                    self.gateway.get_transaction(ref.hash)
                )
            except (OctraError, ValidationError) as err:
                logger.debug("Skipping %s: %s", ref.hash, err)
                continue
            parsed = record.parsed_tx
            if parsed is None:
                logger.debug("Skipping %s: no parsed transfer", ref.hash)
                continue
            history.append(
                HistoryEntry(
                    hash=ref.hash,
                    epoch=ref.epoch,
                    from_=parsed.from_,
                    to=parsed.to,
                    amount=parsed.amount,
                    timestamp=parsed.timestamp,
                )
            )
        logger.info("Resolved %s of %s transactions for %s", len(history), len(refs), address)
        return history

    def get_stats(self, address: str) -> WalletStats:
        history = self.get_history(address, self.stats_limit)
        stats = WalletStats(tx_count=len(history))
        for entry in history:
            try:
                atoms = to_atoms(entry.amount.split()[0])
            except (IndexError, InvalidInputError):
                logger.warning("Unreadable amount %r in %s", entry.amount, entry.hash)
                continue
            if entry.is_outbound(address):
                stats.total_out += atoms
            elif entry.to.lower() == address.lower():
                stats.total_in += atoms
        return stats
