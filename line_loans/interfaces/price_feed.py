"""Price feed protocol — collateral/loan exchange rate abstraction."""
from typing import Protocol


class PriceFeed(Protocol):
    """Abstract interface for the live collateral price quote."""

    def current_price(self) -> float | None: ...

    async def fetch_price(self) -> float | None: ...
