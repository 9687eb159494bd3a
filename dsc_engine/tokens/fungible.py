"""In-memory fungible token with ERC-20 balance and allowance semantics."""
from __future__ import annotations

import logging
from typing import Any

from ..errors import InsufficientAllowance, InsufficientBalance

logger = logging.getLogger(__name__)


class FungibleToken:
    """Balances and allowances keyed by account address.

    Transfers return ``True`` on success and raise on insufficient balance
    or allowance, so a falsy return only comes from subclasses that model
    tokens which report failure instead of raising.
    """

    def __init__(self, address: str, name: str, symbol: str, decimals: int = 18) -> None:
        self._address = address
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol} @ {self._address})"

    @property
    def address(self) -> str:
        return self._address

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(owner, spender, allowed, amount)
        self._move(owner, to, amount)
        self._allowances[(owner, spender)] = allowed - amount
        return True

    # ------------------------------------------------------------------
    # Supply
    # ------------------------------------------------------------------

    def _mint(self, to: str, amount: int) -> None:
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount

    def _burn(self, account: str, amount: int) -> None:
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalance(account, balance, amount)
        self._balances[account] = balance - amount
        self._total_supply -= amount

    def _move(self, sender: str, to: str, amount: int) -> None:
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)
        self._balances[sender] = balance - amount
        self._balances[to] = self.balance_of(to) + amount

    # ------------------------------------------------------------------
    # Atomic scope support
    # ------------------------------------------------------------------

    def snapshot(self) -> Any:
        return dict(self._balances), dict(self._allowances), self._total_supply

    def restore(self, state: Any) -> None:
        balances, allowances, total_supply = state
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply


class MintableToken(FungibleToken):
    """Collateral token with an open faucet, used for local deployments."""

    def mint(self, to: str, amount: int) -> None:
        self._mint(to, amount)
        logger.debug("Minted %d %s to %s", amount, self.symbol, to)
