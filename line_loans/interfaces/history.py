"""History protocol — browser location abstraction."""
from typing import Protocol


class History(Protocol):
    """Abstract interface for reading and changing the current route."""

    @property
    def pathname(self) -> str: ...

    def push(self, path: str) -> None: ...

    def replace(self, path: str) -> None: ...
