"""Transaction submitter protocol — wallet/broadcast abstraction."""
from typing import Any, Protocol


class TransactionSubmitter(Protocol):
    """Abstract interface for broadcasting the borrow transaction."""

    async def borrow(self, collateral_amount: int) -> Any: ...
