"""Notifier protocol — notification channel abstraction."""
from typing import Protocol

from ..models import Notification


class Notifier(Protocol):
    """Abstract interface for showing notifications to the user."""

    async def send_notification(self, notification: Notification) -> bool: ...
