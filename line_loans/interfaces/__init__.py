"""Protocol interfaces for the loan form's external collaborators."""
from .history import History
from .metrics import MetricsSink
from .notifier import Notifier
from .params_store import ParamsStore
from .price_feed import PriceFeed
from .transaction import TransactionSubmitter

__all__ = [
    "History",
    "MetricsSink",
    "Notifier",
    "ParamsStore",
    "PriceFeed",
    "TransactionSubmitter",
]
