"""
Pydantic models for keystore files, transactions and node responses.

Node response models only declare the fields the client reads; anything
else in a response is ignored rather than rejected.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from octrakit.common.config import Config


def _as_text(value: Any) -> Any:
    """Render JSON numbers as text so numeric and string encodings agree."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (int, Decimal)):
        return str(value)
    return value


class KeystoreCrypto(BaseModel):
    cipher: str
    ciphertext: str
    salt: str
    nonce: str


class KeystoreRecord(BaseModel):
    address: str
    crypto: KeystoreCrypto

    def to_json(self) -> str:
        """Serialize to the compact keystore file format."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, content: str | bytes) -> KeystoreRecord:
        return cls.model_validate_json(content)


class TransferInstruction(BaseModel):
    """A value transfer before signing.

    ``amount`` is in atoms; ``timestamp`` keeps the caller's text and is
    normalized only when the canonical payload is built.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_: str = Field(alias="from", min_length=1)
    to_: str = Field(min_length=1)
    amount: str = Field(pattern=r"^[0-9]+$")
    nonce: int = Field(ge=0, le=Config.MAX_NONCE)
    ou: str = ""
    timestamp: str
    message: str | None = None

    @field_validator("amount", "timestamp", mode="before")
    @classmethod
    def _numbers_to_text(cls, value: Any) -> Any:
        return _as_text(value)


class SignedTransaction(BaseModel):
    signature: str
    public_key: str
    tx: TransferInstruction
    raw: str


class BalanceInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    address: str = ""
    balance: str = "0"
    balance_raw: int = 0
    has_public_key: bool = False
    nonce: int = Field(default=0, ge=0)

    @field_validator("balance", mode="before")
    @classmethod
    def _balance_text(cls, value: Any) -> Any:
        return _as_text(value)


class SubmitReceipt(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tx_hash: str = Field(min_length=1)
    status: str | None = None


class TransactionStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Any = None
    epoch: Any = None

    @property
    def is_confirmed(self) -> bool:
        # Either signal is sufficient, whatever type the other one has.
        return self.status == "confirmed" or self.epoch is not None


class TransactionRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hash: str
    epoch: int | None = None


class RecentTransactions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    recent_transactions: list[TransactionRef] = Field(default_factory=list)

    @field_validator("recent_transactions", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ParsedTransfer(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    amount: str
    timestamp: str = ""

    @field_validator("from_", "to", "amount", "timestamp", mode="before")
    @classmethod
    def _fields_to_text(cls, value: Any) -> Any:
        return _as_text(value)


class TransactionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parsed_tx: ParsedTransfer | None = None


class TypedDomain(BaseModel):
    name: str
    version: str = "1"
    chain_id: int = 1


class TypedMember(BaseModel):
    name: str
    type: str


class TypedData(BaseModel):
    domain: TypedDomain
    types: dict[str, list[TypedMember]]
    primary_type: str
    message: dict[str, Any]


class ClientConfig(BaseModel):
    rpc_url: str | None = None
    connect_timeout: float | None = Field(default=None, gt=0)
    poll_interval: float | None = Field(default=None, gt=0)
    confirm_timeout: float | None = Field(default=None, gt=0)
    log_level: int | None = None
