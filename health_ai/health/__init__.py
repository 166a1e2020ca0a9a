from health_ai.health.aggregator import chart_data
from health_ai.health.fetcher import HealthDataFetcher
from health_ai.health.metric_store import MetricStore
from health_ai.health.models import HealthSample, InvalidWindowError, MetricKind
from health_ai.health.summary import latest_status_line, summary

__all__ = [
    "HealthDataFetcher",
    "HealthSample",
    "InvalidWindowError",
    "MetricKind",
    "MetricStore",
    "chart_data",
    "latest_status_line",
    "summary",
]
