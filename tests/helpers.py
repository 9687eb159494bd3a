"""Shared test constants."""
from __future__ import annotations

ETHER = 10**18

DEPLOYER = "deployer"
USER = "user"
LIQUIDATOR = "liquidator"
ENGINE = "dsc-engine"

ETH_USD_PRICE = 2000 * 10**8
BTC_USD_PRICE = 1000 * 10**8
FEED_DECIMALS = 8

STARTING_ERC20_BALANCE = 10 * ETHER
AMOUNT_COLLATERAL = 10 * ETHER
AMOUNT_TO_MINT = 100 * ETHER

NOW = 1_700_000_000


def fixed_clock() -> float:
    return float(NOW)
