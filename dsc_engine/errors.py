"""Exception hierarchy for the engine and its in-memory collaborators."""
from __future__ import annotations


class DSCEngineError(Exception):
    """Base class for every failure raised by the engine."""


# Validation

class NeedsMoreThanZero(DSCEngineError):
    def __init__(self) -> None:
        super().__init__("Amount must be more than zero")


class TokenNotAllowed(DSCEngineError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Token not allowed as collateral: {token}")
        self.token = token


# Solvency

class InsufficientCollateralDeposited(DSCEngineError):
    def __init__(self, account: str, token: str, requested: int, available: int) -> None:
        super().__init__(
            f"{account} has {available} of {token} deposited, {requested} requested"
        )
        self.account = account
        self.token = token
        self.requested = requested
        self.available = available


class BurnAmountExceedsDebt(DSCEngineError):
    def __init__(self, account: str, requested: int, debt: int) -> None:
        super().__init__(f"{account} owes {debt} DSC, cannot burn {requested}")
        self.account = account
        self.requested = requested
        self.debt = debt


class Uint256Overflow(DSCEngineError):
    """A balance, total or fixed-point product past ``MAX_UINT256``."""

    def __init__(self, quantity: str, value: int) -> None:
        super().__init__(f"{quantity} exceeds uint256 range")
        self.quantity = quantity
        self.value = value


class HealthFactorBroken(DSCEngineError):
    def __init__(self, health_factor: int) -> None:
        super().__init__(f"Health factor broken: {health_factor}")
        self.health_factor = health_factor


class HealthFactorOk(DSCEngineError):
    """Liquidation attempted against a position that is not below the minimum."""

    def __init__(self, health_factor: int) -> None:
        super().__init__(f"Health factor is ok: {health_factor}")
        self.health_factor = health_factor


class HealthFactorNotImproved(DSCEngineError):
    def __init__(self, starting: int, ending: int) -> None:
        super().__init__(f"Health factor not improved: {starting} -> {ending}")
        self.starting = starting
        self.ending = ending


# Collaborators

class TransferFailed(DSCEngineError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Transfer of {token} failed")
        self.token = token


class MintFailed(DSCEngineError):
    def __init__(self) -> None:
        super().__init__("DSC mint failed")


class InvalidPrice(DSCEngineError):
    def __init__(self, asset: str, answer: int) -> None:
        super().__init__(f"Feed for {asset} returned non-positive price {answer}")
        self.asset = asset
        self.answer = answer


class StalePrice(DSCEngineError):
    def __init__(self, asset: str, age: float) -> None:
        super().__init__(f"Price for {asset} is stale ({age:.0f}s old)")
        self.asset = asset
        self.age = age


class ReentrantCall(DSCEngineError):
    def __init__(self) -> None:
        super().__init__("Reentrant call")


# Construction

class TokenAddressesAndPriceFeedAddressesMustBeSameLength(DSCEngineError):
    def __init__(self, tokens: int, feeds: int) -> None:
        super().__init__(
            f"Got {tokens} token addresses but {feeds} price feeds"
        )


class ConfigError(ValueError):
    """Invalid deployment configuration."""


# Token collaborators

class TokenError(Exception):
    """Base class for failures raised by the in-memory tokens."""


class InsufficientBalance(TokenError):
    def __init__(self, account: str, balance: int, needed: int) -> None:
        super().__init__(f"{account} balance {balance} < {needed}")
        self.account = account
        self.balance = balance
        self.needed = needed


class InsufficientAllowance(TokenError):
    def __init__(self, owner: str, spender: str, allowance: int, needed: int) -> None:
        super().__init__(
            f"{spender} allowance from {owner} is {allowance}, needs {needed}"
        )
        self.allowance = allowance
        self.needed = needed


class MustBeMoreThanZero(TokenError):
    def __init__(self) -> None:
        super().__init__("Amount must be more than zero")


class BurnAmountExceedsBalance(TokenError):
    def __init__(self, balance: int, amount: int) -> None:
        super().__init__(f"Burn amount {amount} exceeds balance {balance}")


class NotZeroAddress(TokenError):
    def __init__(self) -> None:
        super().__init__("Cannot mint to the zero address")


class NotOwner(TokenError):
    def __init__(self, caller: str) -> None:
        super().__init__(f"{caller} is not the owner")
        self.caller = caller
