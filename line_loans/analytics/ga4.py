"""Google Analytics 4 Measurement Protocol sink."""
import logging
import ssl

import aiohttp
import certifi

from ..config import AnalyticsConfig

logger = logging.getLogger(__name__)


class GA4MetricsSink:
    """Post analytics events to the GA4 Measurement Protocol endpoint."""

    def __init__(self, config: AnalyticsConfig) -> None:
        self.endpoint = config.endpoint
        self.measurement_id = config.measurement_id
        self.api_secret = config.api_secret
        self.client_id = config.client_id

    def build_payload(self, category: str, action: str, value: str = "") -> dict:
        return {
            "client_id": self.client_id,
            "events": [
                {
                    "name": action,
                    "params": {"category": category, "value": value},
                }
            ],
        }

    async def event(self, category: str, action: str, value: str = "") -> bool:
        """Send one event; failures are logged and reported as False."""
        if not self.measurement_id or not self.api_secret:
            logger.debug("GA4 not configured, skipping event %s/%s", category, action)
            return False

        params = {"measurement_id": self.measurement_id, "api_secret": self.api_secret}
        payload = self.build_payload(category, action, value)

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.endpoint, params=params, json=payload
                ) as response:
                    # Measurement Protocol answers 204 No Content
                    if response.status in (200, 204):
                        return True
                    logger.error("GA4 event rejected: HTTP %s", response.status)
                    return False
        except Exception as e:
            logger.error("Failed to send GA4 event: %s", e)
            return False
