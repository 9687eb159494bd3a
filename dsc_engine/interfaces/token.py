"""Token protocols — fungible balances the engine moves around."""
from typing import Protocol

from .stateful import Stateful


class CollateralToken(Stateful, Protocol):
    """Fungible asset accepted as collateral.

    Tokens take part in the engine's atomic scopes, hence ``Stateful``.
    """

    @property
    def address(self) -> str: ...

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, to: str, amount: int) -> bool: ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool: ...


class StableToken(CollateralToken, Protocol):
    """Pegged token; only its owner may mint and burn."""

    @property
    def total_supply(self) -> int: ...

    def mint(self, caller: str, to: str, amount: int) -> bool: ...

    def burn(self, caller: str, amount: int) -> None: ...
