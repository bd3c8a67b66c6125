# Key custody and transaction signing
from octrakit.wallet.address import derive_address, is_valid_address, validate_address
from octrakit.wallet.amount import from_atoms, to_atoms
from octrakit.wallet.keys import KeyMaterial, KeyPair, generate_key_pair, key_pair_from_seed
from octrakit.wallet.keystore import (
    decrypt_seed,
    encrypt_seed,
    load_keystore,
    save_keystore,
    unlock,
)
from octrakit.wallet.transaction import (
    build_canonical,
    normalize_timestamp,
    sign_transaction,
    to_broadcast_form,
    verify_transaction,
)

__all__ = [
    "KeyMaterial",
    "KeyPair",
    "build_canonical",
    "decrypt_seed",
    "derive_address",
    "encrypt_seed",
    "from_atoms",
    "generate_key_pair",
    "is_valid_address",
    "key_pair_from_seed",
    "load_keystore",
    "normalize_timestamp",
    "save_keystore",
    "sign_transaction",
    "to_atoms",
    "to_broadcast_form",
    "unlock",
    "validate_address",
    "verify_transaction",
]
