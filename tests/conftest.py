"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from dsc_engine.engine import DSCEngine
from dsc_engine.oracles import PriceAggregator
from dsc_engine.tokens import DecentralizedStableCoin, MintableToken
from tests.helpers import (
    AMOUNT_COLLATERAL,
    AMOUNT_TO_MINT,
    BTC_USD_PRICE,
    DEPLOYER,
    ENGINE,
    ETH_USD_PRICE,
    FEED_DECIMALS,
    STARTING_ERC20_BALANCE,
    USER,
    fixed_clock,
)


# ---------------------------------------------------------------------------
# Token and feed fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def weth() -> MintableToken:
    token = MintableToken("weth", "Wrapped Ether", "WETH")
    token.mint(USER, STARTING_ERC20_BALANCE)
    return token


@pytest.fixture()
def wbtc() -> MintableToken:
    token = MintableToken("wbtc", "Wrapped Bitcoin", "WBTC")
    token.mint(USER, STARTING_ERC20_BALANCE)
    return token


@pytest.fixture()
def eth_feed() -> PriceAggregator:
    return PriceAggregator(FEED_DECIMALS, ETH_USD_PRICE, "ETH / USD", clock=fixed_clock)


@pytest.fixture()
def btc_feed() -> PriceAggregator:
    return PriceAggregator(FEED_DECIMALS, BTC_USD_PRICE, "BTC / USD", clock=fixed_clock)


@pytest.fixture()
def dsc() -> DecentralizedStableCoin:
    return DecentralizedStableCoin("dsc", owner=DEPLOYER)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine(
    weth: MintableToken,
    wbtc: MintableToken,
    eth_feed: PriceAggregator,
    btc_feed: PriceAggregator,
    dsc: DecentralizedStableCoin,
) -> DSCEngine:
    eng = DSCEngine([weth, wbtc], [eth_feed, btc_feed], dsc, address=ENGINE, clock=fixed_clock)
    dsc.transfer_ownership(DEPLOYER, eng.address)
    return eng


@pytest.fixture()
def deposited_collateral(engine: DSCEngine, weth: MintableToken) -> DSCEngine:
    weth.approve(USER, engine.address, AMOUNT_COLLATERAL)
    engine.deposit_collateral(USER, weth.address, AMOUNT_COLLATERAL)
    return engine


@pytest.fixture()
def deposited_and_minted(engine: DSCEngine, weth: MintableToken) -> DSCEngine:
    weth.approve(USER, engine.address, AMOUNT_COLLATERAL)
    engine.deposit_collateral_and_mint_dsc(
        USER, weth.address, AMOUNT_COLLATERAL, AMOUNT_TO_MINT
    )
    return engine


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    active_network: anvil
    networks:
      anvil:
        deployer: "0xDEPLOYER"
        engine_address: engine
        dsc_address: dsc
        collateral:
          - symbol: WETH
            address: weth
            feed: {decimals: 8, initial_answer: 200000000000}
          - symbol: WBTC
            address: wbtc
            feed: {decimals: 8, initial_answer: 100000000000}
      sepolia:
        deployer: "${SEPOLIA_DEPLOYER}"
        max_price_age: 10800
        pyth:
          hermes_url: "https://hermes.example.com"
          timeout: 5
        collateral:
          - symbol: WETH
            address: "0xWETH"
            feed: {decimals: 8, pyth_id: "aaa111"}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
