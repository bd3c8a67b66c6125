import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from pydantic import ValidationError

from octrakit.common.crypto import CryptoUtils
from octrakit.common.exceptions import InvalidInputError
from octrakit.common.models import TransferInstruction
from octrakit.wallet.keys import KeyMaterial
from octrakit.wallet.transaction import (
    build_canonical,
    normalize_timestamp,
    sign_transaction,
    to_broadcast_form,
    verify_transaction,
)

RECIPIENT = "octD4RxTBurSjSUp3mdM3eAH4Qo4GyU3Ay29oTez3eWVuWV"
MESSAGE = "Test Debug Message"


@pytest.fixture
def key() -> KeyMaterial:
    return KeyMaterial(b"\x11" * 32)


@pytest.fixture
def instruction(key: KeyMaterial) -> TransferInstruction:
    return TransferInstruction(
        from_=key.address,
        to_=RECIPIENT,
        amount="5000000",
        nonce=10,
        timestamp="1737273600",
        message=MESSAGE,
    )


def test_canonical_layout(key: KeyMaterial, instruction: TransferInstruction) -> None:
    expected = (
        '{"from":"%s","to_":"%s","amount":"5000000","nonce":10,'
        '"ou":"1000","timestamp":1737273600}' % (key.address, RECIPIENT)
    )
    assert build_canonical(instruction) == expected.encode()


def test_canonical_excludes_message(instruction: TransferInstruction) -> None:
    raw = build_canonical(instruction)
    assert MESSAGE.encode() not in raw
    assert b"message" not in raw


def test_signed_payload_excludes_message(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    signed = sign_transaction(instruction, key)
    assert MESSAGE not in signed.raw
    assert signed.tx.message == MESSAGE


def test_empty_ou_defaults(key: KeyMaterial, instruction: TransferInstruction) -> None:
    signed = sign_transaction(instruction, key)
    assert '"ou":"1000"' in signed.raw
    assert signed.tx.ou == "1000"


def test_explicit_ou_is_kept(instruction: TransferInstruction) -> None:
    custom = instruction.model_copy(update={"ou": "2500"})
    assert b'"ou":"2500"' in build_canonical(custom)


def test_signature_verifies(key: KeyMaterial, instruction: TransferInstruction) -> None:
    signed = sign_transaction(instruction, key)
    public_key = Ed25519PublicKey.from_public_bytes(
        CryptoUtils.b64decode(signed.public_key)
    )
    signature = CryptoUtils.b64decode(signed.signature)
    assert len(signature) == 64  # noqa: PLR2004
    public_key.verify(signature, signed.raw.encode())
    assert verify_transaction(signed)


def test_signing_with_raw_seed_matches_key_material(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    assert (
        sign_transaction(instruction, key.seed).signature
        == sign_transaction(instruction, key).signature
    )


def test_changed_field_invalidates_signature(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    signed = sign_transaction(instruction, key)
    forged = signed.model_copy(
        update={"tx": signed.tx.model_copy(update={"amount": "9000000"})}
    )
    assert not verify_transaction(forged)


def test_changed_message_keeps_signature_valid(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    # message is outside the signed bytes, so a relay can rewrite it
    signed = sign_transaction(instruction, key)
    relayed = signed.model_copy(
        update={"tx": signed.tx.model_copy(update={"message": "rewritten"})}
    )
    assert verify_transaction(relayed)


def test_broadcast_form_is_superset(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    signed = sign_transaction(instruction, key)
    form = to_broadcast_form(signed)
    assert set(form) == {
        "from",
        "to_",
        "amount",
        "nonce",
        "ou",
        "timestamp",
        "signature",
        "public_key",
        "message",
    }
    assert form["message"] == MESSAGE
    assert form["from"] == key.address
    assert form["nonce"] == 10  # noqa: PLR2004
    assert form["timestamp"] == 1737273600  # noqa: PLR2004
    assert form["public_key"] == key.public_key_b64


def test_broadcast_form_without_message(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    signed = sign_transaction(instruction.model_copy(update={"message": None}), key)
    assert "message" not in to_broadcast_form(signed)


def test_broadcast_timestamp_keeps_fraction(
    key: KeyMaterial, instruction: TransferInstruction
) -> None:
    timed = instruction.model_copy(update={"timestamp": "1737273600.250"})
    signed = sign_transaction(timed, key)
    assert signed.raw.endswith('"timestamp":1737273600.25}')
    assert to_broadcast_form(signed)["timestamp"] == 1737273600.25  # noqa: PLR2004


@pytest.mark.parametrize(
    ("timestamp", "expected"),
    [
        ("1737273600", "1737273600"),
        ("1737273600.500000", "1737273600.5"),
        (1737273600.0, "1737273600"),
        (1737273600.123456, "1737273600.123456"),
        ("1e3", "1000"),
        (1e-7, "0.0000001"),
        (1e22, "10000000000000000000000"),
    ],
)
def test_normalize_timestamp(timestamp: object, expected: str) -> None:
    assert normalize_timestamp(timestamp) == expected  # type: ignore[arg-type]


@pytest.mark.parametrize("timestamp", ["abc", "inf", float("nan")])
def test_normalize_timestamp_rejects(timestamp: object) -> None:
    with pytest.raises(InvalidInputError):
        normalize_timestamp(timestamp)  # type: ignore[arg-type]


def test_float_timestamp_is_accepted(key: KeyMaterial) -> None:
    tx = TransferInstruction(
        from_=key.address, to_=RECIPIENT, amount=1, nonce=1, timestamp=1737273600.5
    )
    assert tx.amount == "1"
    assert build_canonical(tx).endswith(b'"timestamp":1737273600.5}')


def test_instruction_accepts_wire_alias(key: KeyMaterial) -> None:
    tx = TransferInstruction.model_validate(
        {"from": key.address, "to_": RECIPIENT, "amount": "1", "nonce": 1, "timestamp": 5}
    )
    assert tx.from_ == key.address


@pytest.mark.parametrize(
    "changes",
    [
        {"amount": "1.5"},
        {"amount": "-1"},
        {"nonce": -1},
        {"nonce": 2**64},
        {"to_": ""},
    ],
)
def test_instruction_validation(key: KeyMaterial, changes: dict) -> None:
    fields = {
        "from_": key.address,
        "to_": RECIPIENT,
        "amount": "1",
        "nonce": 1,
        "timestamp": "1",
    }
    fields.update(changes)
    with pytest.raises(ValidationError):
        TransferInstruction(**fields)
