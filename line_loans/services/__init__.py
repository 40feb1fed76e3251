"""Service modules"""
from .quote import QuoteService, WalletNotConnectedError

__all__ = ["QuoteService", "WalletNotConnectedError"]
