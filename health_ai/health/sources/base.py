import datetime as dt
from abc import ABC, abstractmethod

from health_ai.health.models import HealthSample, MetricKind


class HealthDataSource(ABC):
    """Producer of daily samples for the metric store."""

    def is_available(self) -> bool:
        """Whether the source can currently be queried (e.g. credentials present)."""
        return True

    @abstractmethod
    async def fetch(self, kind: MetricKind, start: dt.date, end: dt.date) -> list[HealthSample]:
        """
        Fetch daily samples of one kind.

        Args:
            kind: Metric kind to fetch.
            start: First day to fetch (inclusive).
            end: Last day to fetch (inclusive).

        Returns:
            Samples in ascending date order. Days without data may be omitted.
        """
        raise NotImplementedError
