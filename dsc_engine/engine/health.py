"""Health factor evaluation."""
from __future__ import annotations

import logging

from ..constants import (
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_UINT256,
    MIN_HEALTH_FACTOR,
    PRECISION,
)
from ..errors import HealthFactorBroken
from ..models import AccountInformation
from ..oracles.price_oracle import PriceOracle
from ..uint import checked
from .collateral_ledger import CollateralLedger
from .debt_ledger import DebtLedger

logger = logging.getLogger(__name__)


def calculate_health_factor(total_dsc_minted: int, collateral_value_in_usd: int) -> int:
    """health_factor = collateral * 50% * 1e18 / debt, or MAX_UINT256 without debt.

    Intermediate products past uint256 raise ``Uint256Overflow``, so a
    position with debt always scores below the zero-debt sentinel.
    """
    if total_dsc_minted == 0:
        return MAX_UINT256
    adjusted = (
        checked(collateral_value_in_usd * LIQUIDATION_THRESHOLD, "adjusted collateral")
        // LIQUIDATION_PRECISION
    )
    return checked(adjusted * PRECISION, "health factor") // total_dsc_minted


class HealthFactorEvaluator:
    """Combines ledgers and prices; every call reads fresh state."""

    def __init__(
        self, collateral: CollateralLedger, debt: DebtLedger, oracle: PriceOracle
    ) -> None:
        self._collateral = collateral
        self._debt = debt
        self._oracle = oracle

    def account_collateral_value(self, account: str) -> int:
        total = 0
        for asset, amount in self._collateral.balances_of(account).items():
            total += self._oracle.usd_value(asset, amount)
        return checked(total, "collateral value")

    def account_information(self, account: str) -> AccountInformation:
        return AccountInformation(
            total_dsc_minted=self._debt.debt_of(account),
            collateral_value_in_usd=self.account_collateral_value(account),
        )

    def evaluate(self, account: str) -> int:
        info = self.account_information(account)
        health_factor = calculate_health_factor(
            info.total_dsc_minted, info.collateral_value_in_usd
        )
        logger.debug("Health factor of %s: %d", account, health_factor)
        return health_factor

    def is_safe(self, account: str) -> bool:
        return self.evaluate(account) >= MIN_HEALTH_FACTOR

    def assert_safe(self, account: str) -> None:
        health_factor = self.evaluate(account)
        if health_factor < MIN_HEALTH_FACTOR:
            raise HealthFactorBroken(health_factor)
