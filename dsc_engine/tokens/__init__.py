"""In-memory token implementations."""
from .fungible import FungibleToken, MintableToken
from .stablecoin import DecentralizedStableCoin

__all__ = ["DecentralizedStableCoin", "FungibleToken", "MintableToken"]
