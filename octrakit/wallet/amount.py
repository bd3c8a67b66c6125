"""
Conversion between display units and integer atoms (1 unit = 10**6 atoms).
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from octrakit.common.config import Config
from octrakit.common.exceptions import InvalidInputError


def to_atoms(amount: float | int | str | Decimal) -> int:
    """Convert a display amount to atoms, truncating sub-atom digits.

    Floats are read through their shortest decimal form, so ``1.005``
    becomes ``1005000`` rather than the binary neighbour below it.
    """
    if isinstance(amount, bool):
        msg = f"Amount must be a number, got {amount!r}"
        raise InvalidInputError(msg)
    try:
        value = Decimal(repr(amount) if isinstance(amount, float) else str(amount))
    except InvalidOperation as err:
        msg = f"Amount is not a number: {amount!r}"
        raise InvalidInputError(msg) from err
    if not value.is_finite():
        msg = f"Amount must be finite, got {amount!r}"
        raise InvalidInputError(msg)
    if value < 0:
        msg = f"Amount must not be negative, got {amount!r}"
        raise InvalidInputError(msg)
    return int(value.scaleb(Config.UNIT_DECIMALS).to_integral_value(rounding=ROUND_DOWN))


def from_atoms(atoms: int) -> str:
    """Render atoms as a display amount with exactly six fractional digits."""
    sign = "-" if atoms < 0 else ""
    whole, fraction = divmod(abs(atoms), Config.ATOMS_PER_UNIT)
    return f"{sign}{whole}.{fraction:0{Config.UNIT_DECIMALS}d}"
