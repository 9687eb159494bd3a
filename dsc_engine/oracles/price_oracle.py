"""Price adapter — converts between collateral quantities and USD.

All USD amounts are 18-decimal fixed point. A feed reporting with ``d``
decimals is lifted to 18 decimals by a single multiplier
``10 ** (18 - d)``; the same multiplier is used in both directions so that
``token_amount_from_usd(a, usd_value(a, q)) <= q`` with the difference
bounded by integer rounding.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Mapping

from ..constants import PRECISION
from ..errors import InvalidPrice, StalePrice, TokenNotAllowed
from ..interfaces.price_feed import PriceFeed
from ..models import PriceQuote
from ..uint import checked

logger = logging.getLogger(__name__)

_PROTOCOL_DECIMALS = 18


def feed_precision(decimals: int) -> int:
    """Multiplier lifting a ``decimals`` feed answer to 18 decimals."""
    if decimals > _PROTOCOL_DECIMALS:
        raise ValueError(f"Feeds with more than 18 decimals are unsupported: {decimals}")
    return 10 ** (_PROTOCOL_DECIMALS - decimals)


class PriceOracle:
    """Reads the bound feed for an asset on every call.

    Args:
        feeds: asset address -> feed. Copied; the binding is fixed.
        max_price_age: when set, readings older than this many seconds
            (or incomplete rounds) raise ``StalePrice``. ``None`` trusts
            whatever the feed reports.
        clock: time source for the staleness check.
    """

    def __init__(
        self,
        feeds: Mapping[str, PriceFeed],
        max_price_age: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._feeds: dict[str, PriceFeed] = dict(feeds)
        self._max_price_age = max_price_age
        self._clock = clock

    @property
    def assets(self) -> tuple[str, ...]:
        return tuple(self._feeds)

    @property
    def max_price_age(self) -> int | None:
        return self._max_price_age

    def feed_for(self, asset: str) -> PriceFeed:
        feed = self._feeds.get(asset)
        if feed is None:
            raise TokenNotAllowed(asset)
        return feed

    def latest_price(self, asset: str) -> PriceQuote:
        feed = self.feed_for(asset)
        data = feed.latest_round_data()

        if self._max_price_age is not None:
            if data.updated_at == 0 or data.answered_in_round < data.round_id:
                raise StalePrice(asset, float("inf"))
            age = self._clock() - data.updated_at
            if age > self._max_price_age:
                logger.warning("Rejecting stale price for %s (%.0fs old)", asset, age)
                raise StalePrice(asset, age)

        if data.answer <= 0:
            raise InvalidPrice(asset, data.answer)

        return PriceQuote(
            asset=asset,
            price=data.answer,
            decimals=feed.decimals,
            updated_at=data.updated_at,
        )

    def _normalised_price(self, asset: str) -> int:
        quote = self.latest_price(asset)
        return quote.price * feed_precision(quote.decimals)

    def usd_value(self, asset: str, amount: int) -> int:
        """USD value (18 decimals) of ``amount`` smallest units of ``asset``."""
        return checked(self._normalised_price(asset) * amount, "collateral value") // PRECISION

    def token_amount_from_usd(self, asset: str, usd_amount_in_wei: int) -> int:
        """Quantity of ``asset`` worth ``usd_amount_in_wei``, rounded down."""
        return checked(usd_amount_in_wei * PRECISION, "usd amount") // self._normalised_price(asset)
