"""Protocol parameter sources."""
from __future__ import annotations

from .config import ProtocolConfig
from .models import ProtocolParams


class ConfigParamsStore:
    """Serve protocol parameters from the loaded configuration."""

    def __init__(self, config: ProtocolConfig) -> None:
        self._params = config.to_params()

    def protocol_params(self) -> ProtocolParams:
        return self._params
