"""Decentralized Stable Coin — the pegged token minted by the engine."""
from __future__ import annotations

import logging
from typing import Any

from ..constants import ZERO_ADDRESS
from ..errors import (
    BurnAmountExceedsBalance,
    MustBeMoreThanZero,
    NotOwner,
    NotZeroAddress,
)
from .fungible import FungibleToken

logger = logging.getLogger(__name__)


class DecentralizedStableCoin(FungibleToken):
    """Fungible token whose supply is controlled by a single owner.

    After deployment the owner is the engine, which makes the engine the
    sole minter and burner.
    """

    def __init__(self, address: str, owner: str) -> None:
        super().__init__(address, "DecentralizedStableCoin", "DSC", decimals=18)
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._only_owner(caller)
        if new_owner == ZERO_ADDRESS:
            raise NotZeroAddress()
        logger.info("DSC ownership transferred: %s -> %s", self._owner, new_owner)
        self._owner = new_owner

    def mint(self, caller: str, to: str, amount: int) -> bool:
        self._only_owner(caller)
        if to == ZERO_ADDRESS:
            raise NotZeroAddress()
        if amount <= 0:
            raise MustBeMoreThanZero()
        self._mint(to, amount)
        return True

    def burn(self, caller: str, amount: int) -> None:
        self._only_owner(caller)
        if amount <= 0:
            raise MustBeMoreThanZero()
        balance = self.balance_of(caller)
        if balance < amount:
            raise BurnAmountExceedsBalance(balance, amount)
        self._burn(caller, amount)

    def _only_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwner(caller)

    def snapshot(self) -> Any:
        return super().snapshot(), self._owner

    def restore(self, state: Any) -> None:
        token_state, owner = state
        super().restore(token_state)
        self._owner = owner
