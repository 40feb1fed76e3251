"""Page view-models."""
from .staking import StakingPage

__all__ = ["StakingPage"]
