"""Params store protocol — protocol parameter snapshot source."""
from typing import Protocol

from ..models import ProtocolParams


class ParamsStore(Protocol):
    """Abstract interface for origination fee, interest rate and oracle."""

    def protocol_params(self) -> ProtocolParams: ...
