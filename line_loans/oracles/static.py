"""Fixed price feed, used for zero-oracle lines and tests."""
from __future__ import annotations


class StaticPriceFeed:
    """Price feed that always quotes the same price."""

    def __init__(self, price: float | None = None) -> None:
        self._price = price

    def current_price(self) -> float | None:
        return self._price

    async def fetch_price(self) -> float | None:
        return self._price

    def set_price(self, price: float | None) -> None:
        self._price = price
