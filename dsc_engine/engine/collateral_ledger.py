"""Collateral ledger — per-account deposits held in the engine's custody."""
from __future__ import annotations

from typing import Any, Mapping

from ..errors import (
    InsufficientCollateralDeposited,
    NeedsMoreThanZero,
    TokenNotAllowed,
    TransferFailed,
)
from ..interfaces.token import CollateralToken
from ..models import CollateralDeposited, CollateralRedeemed
from ..uint import checked


class CollateralLedger:
    """Tracks how much of each registered asset every account has deposited.

    ``custodian`` is the address holding the deposited tokens. The sum of
    recorded deposits for an asset equals what the custodian holds of it,
    provided nothing else sends tokens to the custodian.
    """

    def __init__(self, tokens: Mapping[str, CollateralToken], custodian: str) -> None:
        self._tokens: dict[str, CollateralToken] = dict(tokens)
        self._custodian = custodian
        self._deposited: dict[str, dict[str, int]] = {}

    @property
    def assets(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    def token(self, asset: str) -> CollateralToken:
        token = self._tokens.get(asset)
        if token is None:
            raise TokenNotAllowed(asset)
        return token

    def balance_of(self, account: str, asset: str) -> int:
        return self._deposited.get(account, {}).get(asset, 0)

    def balances_of(self, account: str) -> dict[str, int]:
        return dict(self._deposited.get(account, {}))

    def total_deposited(self, asset: str) -> int:
        return sum(per_asset.get(asset, 0) for per_asset in self._deposited.values())

    def deposit(self, account: str, asset: str, quantity: int) -> CollateralDeposited:
        if quantity <= 0:
            raise NeedsMoreThanZero()
        token = self.token(asset)

        balance = checked(self.balance_of(account, asset) + quantity, "collateral balance")
        checked(self.total_deposited(asset) + quantity, "total collateral deposited")
        self._set(account, asset, balance)
        event = CollateralDeposited(user=account, token=asset, amount=quantity)

        if not token.transfer_from(self._custodian, account, self._custodian, quantity):
            raise TransferFailed(asset)
        return event

    def redeem(
        self, asset: str, quantity: int, from_account: str, to_account: str
    ) -> CollateralRedeemed:
        if quantity <= 0:
            raise NeedsMoreThanZero()
        token = self.token(asset)

        available = self.balance_of(from_account, asset)
        if available < quantity:
            raise InsufficientCollateralDeposited(from_account, asset, quantity, available)
        self._set(from_account, asset, available - quantity)
        event = CollateralRedeemed(
            redeemed_from=from_account,
            redeemed_to=to_account,
            token=asset,
            amount=quantity,
        )

        if not token.transfer(self._custodian, to_account, quantity):
            raise TransferFailed(asset)
        return event

    def _set(self, account: str, asset: str, quantity: int) -> None:
        per_asset = self._deposited.setdefault(account, {})
        if quantity:
            per_asset[asset] = quantity
        else:
            per_asset.pop(asset, None)
            if not per_asset:
                del self._deposited[account]

    def snapshot(self) -> Any:
        return {account: dict(per_asset) for account, per_asset in self._deposited.items()}

    def restore(self, state: Any) -> None:
        self._deposited = {account: dict(per_asset) for account, per_asset in state.items()}
