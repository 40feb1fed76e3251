"""Telegram notification service."""
import html
import logging
import ssl

import aiohttp
import certifi

from ..config import TelegramConfig
from ..models import Notification

logger = logging.getLogger(__name__)

_TYPE_ICONS = {
    "success": "✅",
    "error": "🚨",
    "warning": "⚠️",
    "info": "ℹ️",
}


class TelegramNotifier:
    """Relay form notifications to a Telegram chat."""

    def __init__(self, config: TelegramConfig) -> None:
        self.bot_token = config.bot_token
        self.chat_id = config.chat_id

    @staticmethod
    def format_message(notification: Notification) -> str:
        icon = _TYPE_ICONS.get(notification.type, _TYPE_ICONS["info"])
        text = f"{icon} <b>{html.escape(notification.title)}</b>"
        if notification.description:
            text += f"\n\n{html.escape(notification.description)}"
        return text

    async def send_notification(self, notification: Notification) -> bool:
        """Send notification; errors and warnings are delivered unmuted."""
        if not self.bot_token or not self.chat_id:
            logger.warning("Telegram credentials not configured")
            return False

        url = f"https://api.telegram.org/bot{self.bot_token}/sendMessage"
        payload = {
            "chat_id": self.chat_id,
            "text": self.format_message(notification),
            "parse_mode": "HTML",
            "disable_notification": notification.type in ("success", "info"),
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(url, json=payload) as response:
                    if response.status == 200:
                        logger.info("Telegram notification sent: %s", notification.title)
                        return True
                    logger.error(
                        "Failed to send Telegram message: %s", response.status
                    )
                    return False
        except Exception as e:
            logger.error("Failed to send Telegram message: %s", e)
            return False
