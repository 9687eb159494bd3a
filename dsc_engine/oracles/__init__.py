"""Price feeds and the engine's price adapter."""
from .aggregator import PriceAggregator
from .price_oracle import PriceOracle
from .pyth import PythPriceUpdater

__all__ = ["PriceAggregator", "PriceOracle", "PythPriceUpdater"]
