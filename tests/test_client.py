import threading
from typing import Any

import pytest
from pydantic import ValidationError

from octrakit.client.client import OctraClient
from octrakit.client.infrastructure.gateway import LedgerGateway
from octrakit.common.exceptions import ConfirmationTimeoutError, WaitCancelledError
from octrakit.common.models import BalanceInfo, SignedTransaction, SubmitReceipt
from octrakit.wallet.keys import KeyMaterial


class StubGateway:
    def __init__(self, status: str = "pending"):
        self.status = status

    def get_balance(self, address: str) -> BalanceInfo:
        return BalanceInfo(address=address, balance="3.0", balance_raw=3_000_000, nonce=2)

    def get_next_nonce(self, address: str) -> int:
        return self.get_balance(address).nonce + 1

    def submit(self, signed_tx: SignedTransaction) -> SubmitReceipt:
        return SubmitReceipt(tx_hash="h" * 64)

    def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        return {"status": self.status, "hash": tx_hash}

    def get_recent_transactions(self, address: str, limit: int) -> list:
        return []


def make_client(gateway: StubGateway) -> OctraClient:
    return OctraClient(gateway=gateway, poll_interval=0.01, confirm_timeout=0.1)


def test_client_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OCTRA_RPC_URL", raising=False)
    client = OctraClient()
    assert client.rpc_url == "https://octra.network"
    assert client.connect_timeout == 30  # noqa: PLR2004
    assert client.poll_interval == 2  # noqa: PLR2004
    assert client.confirm_timeout == 120  # noqa: PLR2004
    assert isinstance(client.gateway, LedgerGateway)


def test_client_overrides() -> None:
    client = OctraClient(
        "http://localhost:8080/", connect_timeout=5, poll_interval=0.5, confirm_timeout=9
    )
    assert client.rpc_url == "http://localhost:8080"
    assert client.gateway.connect_timeout == 5  # type: ignore[attr-defined]  # noqa: PLR2004
    assert client.poll_interval == 0.5  # noqa: PLR2004
    assert client.transfers.confirm_timeout == 9  # noqa: PLR2004


def test_client_rejects_non_positive_interval() -> None:
    with pytest.raises(ValidationError):
        OctraClient(poll_interval=0)


def test_next_nonce() -> None:
    assert make_client(StubGateway()).get_next_nonce("octA") == 3  # noqa: PLR2004


def test_wait_transaction_returns_record() -> None:
    record = make_client(StubGateway("confirmed")).wait_transaction("abc")
    assert record == {"status": "confirmed", "hash": "abc"}


def test_wait_transaction_times_out() -> None:
    with pytest.raises(ConfirmationTimeoutError):
        make_client(StubGateway()).wait_transaction("abc")


def test_wait_transaction_cancelled() -> None:
    event = threading.Event()
    event.set()
    with pytest.raises(WaitCancelledError):
        make_client(StubGateway("confirmed")).wait_transaction("abc", cancel_event=event)


def test_transfer_confirms() -> None:
    client = make_client(StubGateway("confirmed"))
    recipient = KeyMaterial(b"\x02" * 32).address
    result = client.transfer(KeyMaterial(b"\x01" * 32), recipient, 0.5, "hi")
    assert result.confirmed
    assert result.signed.tx.nonce == 3  # noqa: PLR2004
    assert result.signed.tx.amount == "500000"


def test_empty_history_and_stats() -> None:
    client = make_client(StubGateway())
    assert client.get_history("octA") == []
    stats = client.get_stats("octA")
    assert (stats.total_in, stats.total_out, stats.tx_count) == (0, 0, 0)


def test_client_closes_gateway() -> None:
    class ClosingGateway(StubGateway):
        closed = False

        def close(self) -> None:
            self.closed = True

    gateway = ClosingGateway()
    with OctraClient(gateway=gateway) as client:
        assert client.gateway is gateway
    assert gateway.closed


def test_client_close_without_gateway_close() -> None:
    make_client(StubGateway()).close()
