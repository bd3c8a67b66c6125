"""
Application layer: Session login through an external typed-data signer.

The structured-data signing scheme itself lives outside this package; it
is injected as an ``ITypedDataSigner``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from octrakit.common.exceptions import CryptoFailureError
from octrakit.common.models import TypedData, TypedDomain, TypedMember

if TYPE_CHECKING:
    from octrakit.common.interfaces import ITypedDataSigner
    from octrakit.wallet.keys import KeyMaterial

LOGIN_ACTION = "Session Login"

logger = logging.getLogger(__name__)


def login_typed_data(
    domain_name: str, address: str, version: str = "1", chain_id: int = 1
) -> TypedData:
    return TypedData(
        domain=TypedDomain(name=domain_name, version=version, chain_id=chain_id),
        types={
            "Login": [
                TypedMember(name="action", type="string"),
                TypedMember(name="user", type="string"),
            ]
        },
        primary_type="Login",
        message={"action": LOGIN_ACTION, "user": address},
    )


class SessionAuthenticator:
    """Signs login messages and checks the signer when the scheme allows it."""

    def __init__(self, signer: ITypedDataSigner, domain_name: str):
        self.signer = signer
        self.domain_name = domain_name

    def login(self, key: KeyMaterial) -> str:
        """Return the login signature for ``key``."""
        typed_data = login_typed_data(self.domain_name, key.address)
        signature = self.signer.sign_typed_data(typed_data, key.seed)

        signer_address = getattr(self.signer, "signer_address", None)
        if signer_address is not None:
            recovered = signer_address(typed_data, signature, key.public_key_b64)
            if recovered != key.address:
                msg = "Invalid identity signature"
                raise CryptoFailureError(msg)
            logger.info("Identity verified for %s", key.address)
        return signature
