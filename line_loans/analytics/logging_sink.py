"""Metrics sink that only writes events to the log."""
import logging

logger = logging.getLogger(__name__)


class LoggingMetricsSink:
    """Record analytics events as log lines."""

    async def event(self, category: str, action: str, value: str = "") -> bool:
        logger.info("Analytics event %s/%s value=%s", category, action, value)
        return True
