"""Notification modules."""
from .errors import classify_submission_error
from .telegram import TelegramNotifier

__all__ = ["TelegramNotifier", "classify_submission_error"]
