"""Builds tokens, feeds, DSC and the engine for a configured network."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from .config import NetworkConfig
from .constants import FEED_TIMEOUT
from .engine import DSCEngine
from .oracles import PriceAggregator, PythPriceUpdater
from .tokens import DecentralizedStableCoin, MintableToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deployment:
    engine: DSCEngine
    dsc: DecentralizedStableCoin
    tokens: dict[str, MintableToken]
    feeds: dict[str, PriceAggregator]
    pyth: PythPriceUpdater | None = None


def deploy(network: NetworkConfig, clock: Callable[[], float] = time.time) -> Deployment:
    """Deploy a fresh engine for ``network``.

    Collateral tokens and feeds are keyed by symbol in the result. Feeds
    bound to a Pyth id start empty unless an ``initial_answer`` is given
    and are filled by ``Deployment.pyth.refresh()``. Networks using Pyth
    check price age, ``FEED_TIMEOUT`` unless ``max_price_age`` is set.
    """
    tokens: dict[str, MintableToken] = {}
    feeds: dict[str, PriceAggregator] = {}
    pyth_bindings: dict[str, tuple[str, PriceAggregator]] = {}

    for asset in network.collateral:
        token = MintableToken(asset.address, asset.symbol, asset.symbol, asset.decimals)
        feed = PriceAggregator(
            decimals=asset.feed.decimals,
            initial_answer=asset.feed.initial_answer,
            description=f"{asset.symbol} / USD",
            clock=clock,
        )
        tokens[asset.symbol] = token
        feeds[asset.symbol] = feed
        if asset.feed.pyth_id:
            pyth_bindings[asset.address] = (asset.feed.pyth_id, feed)

    max_price_age = network.max_price_age
    if max_price_age is None and pyth_bindings:
        max_price_age = FEED_TIMEOUT

    dsc = DecentralizedStableCoin(network.dsc_address, owner=network.deployer)
    engine = DSCEngine(
        list(tokens.values()),
        list(feeds.values()),
        dsc,
        address=network.engine_address,
        max_price_age=max_price_age,
        clock=clock,
    )
    dsc.transfer_ownership(network.deployer, engine.address)

    pyth = None
    if pyth_bindings and network.pyth is not None:
        pyth = PythPriceUpdater(network.pyth, pyth_bindings)

    logger.info(
        "Deployed engine %s on %s with collateral %s",
        engine.address, network.name, ", ".join(tokens),
    )
    return Deployment(engine=engine, dsc=dsc, tokens=tokens, feeds=feeds, pyth=pyth)
