# Octra wallet toolkit

from octrakit.client.client import OctraClient
from octrakit.wallet.keys import KeyMaterial
from octrakit.wallet.keystore import decrypt_seed, encrypt_seed
from octrakit.wallet.transaction import sign_transaction, to_broadcast_form

__all__ = [
    "KeyMaterial",
    "OctraClient",
    "decrypt_seed",
    "encrypt_seed",
    "sign_transaction",
    "to_broadcast_form",
]
