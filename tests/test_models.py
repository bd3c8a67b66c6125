import pytest
from pydantic import ValidationError

from octrakit.common.models import (
    BalanceInfo,
    ClientConfig,
    KeystoreRecord,
    RecentTransactions,
    SubmitReceipt,
    TransactionRecord,
    TransactionStatus,
    TransferInstruction,
)


def test_transfer_instruction_aliases() -> None:
    tx = TransferInstruction.model_validate(
        {"from": "octA", "to_": "octB", "amount": 1000, "nonce": 1, "timestamp": 1.5}
    )
    assert tx.from_ == "octA"
    assert tx.amount == "1000"
    assert tx.timestamp == "1.5"
    assert tx.ou == ""
    assert tx.message is None


def test_transfer_instruction_validation() -> None:
    base = {"from_": "octA", "to_": "octB", "amount": "1", "nonce": 0, "timestamp": "1"}
    with pytest.raises(ValidationError):
        TransferInstruction(**{**base, "amount": "-1"})  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        TransferInstruction(**{**base, "nonce": 2**64})  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        TransferInstruction(**{**base, "from_": ""})  # type: ignore[arg-type]


def test_transfer_instruction_is_frozen() -> None:
    tx = TransferInstruction(from_="a", to_="b", amount="1", nonce=0, timestamp="1")
    with pytest.raises(ValidationError):
        tx.nonce = 2  # type: ignore[misc]


def test_balance_info_accepts_numbers() -> None:
    info = BalanceInfo.model_validate(
        {"balance": 12.5, "balance_raw": "12500000", "nonce": 3, "unknown": 1}
    )
    assert info.balance == "12.5"
    assert info.balance_raw == 12500000  # noqa: PLR2004
    assert info.address == ""


def test_submit_receipt_requires_hash() -> None:
    with pytest.raises(ValidationError):
        SubmitReceipt.model_validate({"tx_hash": ""})


def test_transaction_status() -> None:
    assert TransactionStatus(status="confirmed").is_confirmed
    assert TransactionStatus(status="pending", epoch=0).is_confirmed
    assert not TransactionStatus(status="pending").is_confirmed
    assert not TransactionStatus().is_confirmed
    assert TransactionStatus.model_validate({"status": 1, "epoch": 42}).is_confirmed
    assert not TransactionStatus.model_validate({"status": ["confirmed"]}).is_confirmed


def test_recent_transactions_null() -> None:
    assert RecentTransactions.model_validate({"recent_transactions": None}).recent_transactions == []


def test_transaction_record_parsed() -> None:
    record = TransactionRecord.model_validate(
        {"parsed_tx": {"from": "octA", "to": "octB", "amount": 2, "timestamp": 10}}
    )
    assert record.parsed_tx is not None
    assert record.parsed_tx.from_ == "octA"
    assert record.parsed_tx.amount == "2"
    assert record.parsed_tx.timestamp == "10"


def test_keystore_record_json() -> None:
    content = (
        '{"address":"octA","crypto":{"cipher":"aes-256-gcm",'
        '"ciphertext":"Y3Q=","salt":"c2FsdA==","nonce":"bm9uY2U="}}'
    )
    record = KeystoreRecord.from_json(content)
    assert record.crypto.cipher == "aes-256-gcm"
    assert record.to_json() == content


def test_client_config_positive_intervals() -> None:
    with pytest.raises(ValidationError):
        ClientConfig(confirm_timeout=0)
    assert ClientConfig().model_dump(exclude_none=True) == {}
