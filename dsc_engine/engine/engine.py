"""DSC engine — position operations and liquidation.

Every public mutator runs under the engine's reentrancy guard and inside a
single ``Transaction`` spanning the ledgers, the DSC token and all
collateral tokens. Either the whole operation succeeds and its events are
published, or everything is restored and nothing is published.
"""
from __future__ import annotations

import functools
import logging
import time
from collections import deque
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence, TypeVar, Union, cast

from ..constants import (
    ADDITIONAL_FEED_PRECISION,
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MIN_HEALTH_FACTOR,
    PRECISION,
)
from ..errors import (
    HealthFactorNotImproved,
    HealthFactorOk,
    NeedsMoreThanZero,
    TokenAddressesAndPriceFeedAddressesMustBeSameLength,
)
from ..interfaces.price_feed import PriceFeed
from ..interfaces.token import CollateralToken, StableToken
from ..models import AccountInformation, CollateralDeposited, CollateralRedeemed
from ..oracles.price_oracle import PriceOracle
from .collateral_ledger import CollateralLedger
from .debt_ledger import DebtLedger
from .health import HealthFactorEvaluator, calculate_health_factor
from .transaction import ReentrancyGuard, Transaction

logger = logging.getLogger(__name__)

Event = Union[CollateralDeposited, CollateralRedeemed]
Listener = Callable[[Event], None]

_F = TypeVar("_F", bound=Callable[..., Any])


def _view(method: _F) -> _F:
    """Run a read-only method once no other thread is mid-operation."""

    @functools.wraps(method)
    def wrapper(self: DSCEngine, *args: Any, **kwargs: Any) -> Any:
        with self._guard.read():
            return method(self, *args, **kwargs)

    return cast(_F, wrapper)


class DSCEngine:
    """Overcollateralised DSC issuance against a fixed set of collateral assets.

    Args:
        collateral_tokens: accepted collateral, identified by ``token.address``.
        price_feeds: USD feed for each token, same order as ``collateral_tokens``.
        dsc: the pegged token; must be owned by ``address`` before use.
        address: the engine's own account, custodian of collateral.
        max_price_age: optional staleness limit forwarded to ``PriceOracle``.
        history_size: committed events kept in ``events``; ``None`` keeps
            all of them. Subscribers receive every event regardless.
    """

    def __init__(
        self,
        collateral_tokens: Sequence[CollateralToken],
        price_feeds: Sequence[PriceFeed],
        dsc: StableToken,
        address: str = "dsc-engine",
        max_price_age: int | None = None,
        clock: Callable[[], float] = time.time,
        history_size: int | None = 1000,
    ) -> None:
        if len(collateral_tokens) != len(price_feeds):
            raise TokenAddressesAndPriceFeedAddressesMustBeSameLength(
                len(collateral_tokens), len(price_feeds)
            )

        self.address = address
        self._dsc = dsc
        self._oracle = PriceOracle(
            {t.address: f for t, f in zip(collateral_tokens, price_feeds)},
            max_price_age=max_price_age,
            clock=clock,
        )
        self._collateral = CollateralLedger(
            {t.address: t for t in collateral_tokens}, custodian=address
        )
        self._debt = DebtLedger(dsc, custodian=address)
        self._health = HealthFactorEvaluator(self._collateral, self._debt, self._oracle)

        self._participants = [self._collateral, self._debt, dsc, *collateral_tokens]
        self._guard = ReentrancyGuard()
        self._events: deque[Event] = deque(maxlen=history_size)
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @property
    @_view
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _publish(self, staged: list[Event]) -> None:
        for event in staged:
            self._events.append(event)
            if isinstance(event, CollateralDeposited):
                logger.info(
                    "CollateralDeposited user=%s token=%s amount=%d",
                    event.user, event.token, event.amount,
                )
            else:
                logger.info(
                    "CollateralRedeemed from=%s to=%s token=%s amount=%d",
                    event.redeemed_from, event.redeemed_to, event.token, event.amount,
                )
            for listener in self._listeners:
                try:
                    listener(event)
                except Exception as e:
                    logger.error("Event listener failed: %s", e)

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[list[Event]]:
        staged: list[Event] = []
        with self._guard:
            with Transaction(self._participants, name=operation):
                yield staged
            self._publish(staged)

    # ------------------------------------------------------------------
    # Position operations
    # ------------------------------------------------------------------

    def deposit_collateral_and_mint_dsc(
        self, sender: str, token: str, amount_collateral: int, amount_dsc_to_mint: int
    ) -> None:
        """Deposit collateral and mint DSC in one step."""
        with self._atomic("deposit_collateral_and_mint_dsc") as staged:
            self._deposit_collateral(sender, token, amount_collateral, staged)
            self._mint_dsc(sender, amount_dsc_to_mint)

    def deposit_collateral(self, sender: str, token: str, amount: int) -> None:
        """Pull ``amount`` of ``token`` from ``sender`` into custody.

        ``sender`` must have approved the engine for at least ``amount``.
        """
        with self._atomic("deposit_collateral") as staged:
            self._deposit_collateral(sender, token, amount, staged)

    def redeem_collateral_for_dsc(
        self, sender: str, token: str, amount_collateral: int, amount_dsc_to_burn: int
    ) -> None:
        """Burn DSC, then withdraw collateral, in one step."""
        with self._atomic("redeem_collateral_for_dsc") as staged:
            self._burn_dsc(sender, amount_dsc_to_burn, on_behalf_of=sender)
            staged.append(self._collateral.redeem(token, amount_collateral, sender, sender))
            self._health.assert_safe(sender)

    def redeem_collateral(self, sender: str, token: str, amount: int) -> None:
        with self._atomic("redeem_collateral") as staged:
            staged.append(self._collateral.redeem(token, amount, sender, sender))
            self._health.assert_safe(sender)

    def mint_dsc(self, sender: str, amount: int) -> None:
        with self._atomic("mint_dsc"):
            self._mint_dsc(sender, amount)
        logger.info("Minted %d DSC to %s", amount, sender)

    def burn_dsc(self, sender: str, amount: int) -> None:
        with self._atomic("burn_dsc"):
            self._burn_dsc(sender, amount, on_behalf_of=sender)
            # Burning cannot lower the health factor; checked anyway.
            self._health.assert_safe(sender)
        logger.info("Burned %d DSC of %s", amount, sender)

    # ------------------------------------------------------------------
    # Liquidation
    # ------------------------------------------------------------------

    def liquidate(self, sender: str, collateral: str, user: str, debt_to_cover: int) -> int:
        """Repay ``debt_to_cover`` of ``user``'s debt and seize their collateral.

        The liquidator receives the collateral equivalent of the repaid
        debt plus a 10% bonus. The target must start below the minimum
        health factor and end strictly healthier than it started; the
        liquidator must itself end healthy.

        Returns the amount of ``collateral`` transferred to ``sender``.
        """
        if debt_to_cover <= 0:
            raise NeedsMoreThanZero()

        with self._atomic("liquidate") as staged:
            starting_health_factor = self._health.evaluate(user)
            if starting_health_factor >= MIN_HEALTH_FACTOR:
                logger.warning(
                    "Liquidation of %s rejected: health factor %d is ok",
                    user, starting_health_factor,
                )
                raise HealthFactorOk(starting_health_factor)

            token_amount_from_debt_covered = self._oracle.token_amount_from_usd(
                collateral, debt_to_cover
            )
            bonus_collateral = (
                token_amount_from_debt_covered * LIQUIDATION_BONUS // LIQUIDATION_PRECISION
            )
            seized = token_amount_from_debt_covered + bonus_collateral

            staged.append(self._collateral.redeem(collateral, seized, user, sender))
            self._burn_dsc(sender, debt_to_cover, on_behalf_of=user)

            ending_health_factor = self._health.evaluate(user)
            if ending_health_factor <= starting_health_factor:
                raise HealthFactorNotImproved(starting_health_factor, ending_health_factor)
            self._health.assert_safe(sender)

        logger.info(
            "Liquidated %s: %d DSC covered by %s for %d of %s (health %d -> %d)",
            user, debt_to_cover, sender, seized, collateral,
            starting_health_factor, ending_health_factor,
        )
        return seized

    # ------------------------------------------------------------------
    # Internal steps (callers hold the guard and the transaction)
    # ------------------------------------------------------------------

    def _deposit_collateral(
        self, sender: str, token: str, amount: int, staged: list[Event]
    ) -> None:
        staged.append(self._collateral.deposit(sender, token, amount))

    def _mint_dsc(self, sender: str, amount: int) -> None:
        self._debt.increase_debt(sender, amount)
        self._health.assert_safe(sender)
        logger.debug("Minting %d DSC to %s", amount, sender)

    def _burn_dsc(self, payer: str, amount: int, on_behalf_of: str) -> None:
        self._debt.decrease_debt(on_behalf_of, amount, payer)
        logger.debug("Burning %d DSC of %s paid by %s", amount, on_behalf_of, payer)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def dsc(self) -> StableToken:
        return self._dsc

    @property
    def oracle(self) -> PriceOracle:
        return self._oracle

    @_view
    def get_health_factor(self, user: str) -> int:
        return self._health.evaluate(user)

    @_view
    def get_account_information(self, user: str) -> AccountInformation:
        return self._health.account_information(user)

    @_view
    def get_account_collateral_value(self, user: str) -> int:
        return self._health.account_collateral_value(user)

    @_view
    def get_collateral_balance_of_user(self, user: str, token: str) -> int:
        return self._collateral.balance_of(user, token)

    @_view
    def get_total_collateral_deposited(self, token: str) -> int:
        return self._collateral.total_deposited(token)

    @_view
    def get_dsc_minted(self, user: str) -> int:
        """Debt of ``user``; needs no price, unlike ``get_account_information``."""
        return self._debt.debt_of(user)

    @_view
    def get_total_dsc_minted(self) -> int:
        return self._debt.total_debt()

    def get_usd_value(self, token: str, amount: int) -> int:
        return self._oracle.usd_value(token, amount)

    def get_token_amount_from_usd(self, token: str, usd_amount_in_wei: int) -> int:
        return self._oracle.token_amount_from_usd(token, usd_amount_in_wei)

    def calculate_health_factor(
        self, total_dsc_minted: int, collateral_value_in_usd: int
    ) -> int:
        return calculate_health_factor(total_dsc_minted, collateral_value_in_usd)

    def get_collateral_tokens(self) -> tuple[str, ...]:
        return self._collateral.assets

    def get_collateral_token_price_feed(self, token: str) -> PriceFeed:
        return self._oracle.feed_for(token)

    @staticmethod
    def get_precision() -> int:
        return PRECISION

    @staticmethod
    def get_additional_feed_precision() -> int:
        return ADDITIONAL_FEED_PRECISION

    @staticmethod
    def get_liquidation_threshold() -> int:
        return LIQUIDATION_THRESHOLD

    @staticmethod
    def get_liquidation_bonus() -> int:
        return LIQUIDATION_BONUS

    @staticmethod
    def get_liquidation_precision() -> int:
        return LIQUIDATION_PRECISION

    @staticmethod
    def get_min_health_factor() -> int:
        return MIN_HEALTH_FACTOR
