"""Data models, all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoundData:
    """Single price-feed reading; ``answer`` is in feed-native decimals."""

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int


@dataclass(frozen=True)
class PriceQuote:
    """Latest price of a collateral asset as seen by the engine."""

    asset: str
    price: int
    decimals: int
    updated_at: int


@dataclass(frozen=True)
class AccountInformation:
    """Debt and collateral value of one account, both 18-decimal USD."""

    total_dsc_minted: int
    collateral_value_in_usd: int


@dataclass(frozen=True)
class CollateralDeposited:
    user: str
    token: str
    amount: int


@dataclass(frozen=True)
class CollateralRedeemed:
    redeemed_from: str
    redeemed_to: str
    token: str
    amount: int
