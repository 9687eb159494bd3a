"""Pyth Network price source — pushes Hermes prices into local feeds."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Mapping

import aiohttp
import certifi

from ..config import PythConfig
from .aggregator import PriceAggregator

logger = logging.getLogger(__name__)


def rescale_answer(price_raw: int, expo: int, decimals: int) -> int:
    """Convert a Pyth ``price * 10**expo`` reading to ``decimals`` fixed point."""
    shift = decimals + expo
    if shift >= 0:
        return price_raw * 10**shift
    return price_raw // 10**-shift


class PythPriceUpdater:
    """Fetch latest prices from Pyth Hermes and record them as new rounds.

    Args:
        config: Hermes endpoint settings.
        feeds: asset address -> (Pyth feed id, aggregator to update).
    """

    def __init__(
        self,
        config: PythConfig,
        feeds: Mapping[str, tuple[str, PriceAggregator]],
    ) -> None:
        self.hermes_url = config.hermes_url
        self.timeout = config.timeout
        self.feeds = dict(feeds)

    async def refresh(self) -> dict[str, int]:
        """Pull one round for every bound asset.

        Returns the new answers keyed by asset. On HTTP or network errors
        nothing is updated and an empty dict is returned.
        """
        updated: dict[str, int] = {}

        feed_ids = list({fid for fid, _ in self.feeds.values()})
        if not feed_ids:
            return updated

        query_params = "&".join([f"ids[]={fid}" for fid in feed_ids])
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from Pyth: HTTP %s", response.status
                        )
                        return updated

                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.error("Error fetching prices from Pyth: %s", e)
            return updated

        # Reverse mapping from feed ID to assets
        id_to_assets: dict[str, list[str]] = {}
        for asset, (feed_id, _) in self.feeds.items():
            id_to_assets.setdefault(feed_id.removeprefix("0x"), []).append(asset)

        for item in data.get("parsed", []):
            feed_id = str(item.get("id", "")).removeprefix("0x")
            price_data = item.get("price", {})
            price_raw = int(price_data.get("price", 0))
            expo = int(price_data.get("expo", 0))
            publish_time = int(price_data.get("publish_time", 0)) or None

            for asset in id_to_assets.get(feed_id, []):
                aggregator = self.feeds[asset][1]
                answer = rescale_answer(price_raw, expo, aggregator.decimals)
                aggregator.update_answer(answer, updated_at=publish_time)
                updated[asset] = answer

        logger.info("Fetched prices from Pyth Network:")
        for asset, answer in sorted(updated.items()):
            logger.info("  %s: %d", asset, answer)

        return updated
