"""LINE loan form and staking view-models."""

__version__ = "0.1.0"
