"""Protocol interfaces for the engine's collaborators."""
from .price_feed import PriceFeed
from .stateful import Stateful
from .token import CollateralToken, StableToken

__all__ = ["CollateralToken", "PriceFeed", "StableToken", "Stateful"]
