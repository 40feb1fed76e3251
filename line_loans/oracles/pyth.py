"""Pyth Network price feed for the collateral/loan pair."""
from __future__ import annotations

import logging
import ssl

import aiohttp
import certifi

from ..config import PythConfig

logger = logging.getLogger(__name__)


def _normalize_feed_id(feed_id: str) -> str:
    feed_id = feed_id.lower()
    return feed_id[2:] if feed_id.startswith("0x") else feed_id


class PythPriceFeed:
    """Latest price of one Pyth feed, cached between fetches."""

    def __init__(self, config: PythConfig) -> None:
        self.hermes_url = config.hermes_url
        self.feed_id = config.feed_id
        self.timeout = config.timeout
        self._price: float | None = None

    def current_price(self) -> float | None:
        return self._price

    async def fetch_price(self) -> float | None:
        """Fetch the latest price from Hermes.

        On HTTP or network errors the previously fetched price is kept and
        returned.
        """
        if not self.feed_id:
            return self._price

        url = f"{self.hermes_url}?ids[]={self.feed_id}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching price from Pyth: HTTP %s", response.status
                        )
                        return self._price

                    data = await response.json()
        except Exception as e:
            logger.error("Error fetching price from Pyth: %s", e)
            return self._price

        wanted = _normalize_feed_id(self.feed_id)
        for item in data.get("parsed", []):
            if _normalize_feed_id(item.get("id", "")) != wanted:
                continue
            price_data = item.get("price", {})
            price_raw = int(price_data.get("price", 0))
            expo = int(price_data.get("expo", 0))
            self._price = price_raw * (10**expo)
            logger.info("Fetched price from Pyth: %.8f", self._price)
            break
        else:
            logger.warning("Pyth response did not contain feed %s", self.feed_id)

        return self._price
