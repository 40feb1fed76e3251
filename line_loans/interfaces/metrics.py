"""Metrics sink protocol — analytics event abstraction."""
from typing import Protocol


class MetricsSink(Protocol):
    """Abstract interface for recording analytics events."""

    async def event(self, category: str, action: str, value: str = "") -> bool: ...
