"""Debt ledger — DSC minted against each account's collateral."""
from __future__ import annotations

from typing import Any

from ..errors import BurnAmountExceedsDebt, MintFailed, NeedsMoreThanZero, TransferFailed
from ..interfaces.token import StableToken
from ..uint import checked


class DebtLedger:
    """Per-account DSC debt; mints and burns through the DSC token.

    ``custodian`` must own the DSC token, since it is the one calling
    ``mint`` and ``burn``.
    """

    def __init__(self, dsc: StableToken, custodian: str) -> None:
        self._dsc = dsc
        self._custodian = custodian
        self._minted: dict[str, int] = {}

    def debt_of(self, account: str) -> int:
        return self._minted.get(account, 0)

    def total_debt(self) -> int:
        return sum(self._minted.values())

    def increase_debt(self, account: str, quantity: int) -> None:
        if quantity <= 0:
            raise NeedsMoreThanZero()
        debt = checked(self.debt_of(account) + quantity, "debt")
        checked(self._dsc.total_supply + quantity, "DSC supply")
        self._minted[account] = debt
        if not self._dsc.mint(self._custodian, account, quantity):
            raise MintFailed()

    def decrease_debt(self, on_behalf_of: str, quantity: int, payer: str) -> None:
        if quantity <= 0:
            raise NeedsMoreThanZero()
        debt = self.debt_of(on_behalf_of)
        if debt < quantity:
            raise BurnAmountExceedsDebt(on_behalf_of, quantity, debt)

        remaining = debt - quantity
        if remaining:
            self._minted[on_behalf_of] = remaining
        else:
            del self._minted[on_behalf_of]

        if not self._dsc.transfer_from(self._custodian, payer, self._custodian, quantity):
            raise TransferFailed(self._dsc.address)
        self._dsc.burn(self._custodian, quantity)

    def snapshot(self) -> Any:
        return dict(self._minted)

    def restore(self, state: Any) -> None:
        self._minted = dict(state)
