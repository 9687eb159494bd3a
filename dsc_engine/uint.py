"""uint256 range checks for ledger balances and fixed-point products."""
from __future__ import annotations

from .constants import MAX_UINT256
from .errors import Uint256Overflow


def checked(value: int, quantity: str) -> int:
    """Return ``value`` unchanged, or raise ``Uint256Overflow`` past ``MAX_UINT256``."""
    if value > MAX_UINT256:
        raise Uint256Overflow(quantity, value)
    return value
