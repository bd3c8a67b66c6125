"""
Canonical encoding and signing of transfer instructions (OTX-1).

The signed bytes are a compact JSON object with the fixed key order
``from, to_, amount, nonce, ou, timestamp``. ``message`` is not part of
the signed bytes; it only travels in the broadcast form, so a relay can
change or drop it without invalidating the signature.
"""

from __future__ import annotations

import json
import logging
import math
from decimal import Decimal
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from octrakit.common.config import Config
from octrakit.common.crypto import CryptoUtils
from octrakit.common.exceptions import InvalidInputError
from octrakit.common.models import SignedTransaction, TransferInstruction
from octrakit.wallet.keys import KeyMaterial

logger = logging.getLogger(__name__)

CANONICAL_FIELDS = ("from", "to_", "amount", "nonce", "ou", "timestamp")


def normalize_timestamp(timestamp: str | float | int | Decimal) -> str:
    """Render a timestamp as the shortest exact positional decimal.

    The value is read as a binary64 float. Trailing zeros, a bare decimal
    point and exponent notation never appear in the result.
    """
    try:
        value = float(timestamp)
    except (TypeError, ValueError) as err:
        msg = f"Timestamp is not a number: {timestamp!r}"
        raise InvalidInputError(msg) from err
    if not math.isfinite(value):
        msg = f"Timestamp must be finite, got {timestamp!r}"
        raise InvalidInputError(msg)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _with_defaults(instruction: TransferInstruction) -> TransferInstruction:
    return instruction.model_copy(
        update={
            "ou": instruction.ou or Config.DEFAULT_OU,
            "timestamp": normalize_timestamp(instruction.timestamp),
        }
    )


def _encode(instruction: TransferInstruction) -> bytes:
    values = (
        json.dumps(instruction.from_),
        json.dumps(instruction.to_),
        json.dumps(instruction.amount),
        str(instruction.nonce),
        json.dumps(instruction.ou),
        instruction.timestamp,
    )
    body = ",".join(
        f"{json.dumps(name)}:{value}" for name, value in zip(CANONICAL_FIELDS, values)
    )
    return ("{" + body + "}").encode("utf-8")


def build_canonical(instruction: TransferInstruction) -> bytes:
    """Build the exact byte string that gets signed."""
    return _encode(_with_defaults(instruction))


def sign_transaction(
    instruction: TransferInstruction, key: KeyMaterial | bytes
) -> SignedTransaction:
    """Canonicalize and sign ``instruction`` with ``key`` (key material or raw seed)."""
    key_material = key if isinstance(key, KeyMaterial) else KeyMaterial(key)
    tx = _with_defaults(instruction)
    raw = _encode(tx)
    signature = key_material.sign(raw)
    logger.debug("Signed transaction nonce=%s from %s", tx.nonce, tx.from_)
    return SignedTransaction(
        signature=CryptoUtils.b64encode(signature),
        public_key=key_material.public_key_b64,
        tx=tx,
        raw=raw.decode("utf-8"),
    )


def _timestamp_number(timestamp: str) -> int | float:
    if "." in timestamp:
        return float(timestamp)
    return int(timestamp)


def to_broadcast_form(signed_tx: SignedTransaction) -> dict[str, Any]:
    """Build the submission body: canonical fields, signature, key and message."""
    tx = signed_tx.tx
    form: dict[str, Any] = {
        "from": tx.from_,
        "to_": tx.to_,
        "amount": tx.amount,
        "nonce": tx.nonce,
        "ou": tx.ou,
        "timestamp": _timestamp_number(tx.timestamp),
        "signature": signed_tx.signature,
        "public_key": signed_tx.public_key,
    }
    if tx.message:
        form["message"] = tx.message
    return form


def verify_transaction(signed_tx: SignedTransaction) -> bool:
    """Check the signature against the canonical bytes rebuilt from ``tx``."""
    try:
        public_key = Ed25519PublicKey.from_public_bytes(
            CryptoUtils.b64decode(signed_tx.public_key)
        )
        signature = CryptoUtils.b64decode(signed_tx.signature)
    except ValueError:
        return False
    raw = build_canonical(signed_tx.tx)
    if raw != signed_tx.raw.encode("utf-8"):
        return False
    try:
        public_key.verify(signature, raw)
    except InvalidSignature:
        return False
    return True
