"""Price feed protocol — round-based oracle abstraction."""
from typing import Protocol

from ..models import RoundData


class PriceFeed(Protocol):
    """Abstract interface for a USD price feed of one asset."""

    @property
    def decimals(self) -> int: ...

    def latest_round_data(self) -> RoundData: ...
