"""Analytics sinks."""
from .ga4 import GA4MetricsSink
from .logging_sink import LoggingMetricsSink

__all__ = ["GA4MetricsSink", "LoggingMetricsSink"]
