import asyncio
import datetime as dt
from typing import Optional

from loguru import logger

from health_ai.health.aggregator import local_now, window_start
from health_ai.health.metric_store import MetricStore
from health_ai.health.models import MetricKind
from health_ai.health.sources.base import HealthDataSource

DEFAULT_LOOKBACK_DAYS = 30


class HealthDataFetcher:
    """
    Populates a metric store from a health data source.

    Every fetch replaces each kind's samples wholesale, so fetching again
    without a change in the source leaves the store unchanged.
    """

    def __init__(self, source: HealthDataSource, lookback_days: int = DEFAULT_LOOKBACK_DAYS):
        """
        Args:
            source: Where samples come from.
            lookback_days: Number of trailing days requested from the source.
        """
        self.source = source
        self.lookback_days = lookback_days

    async def fetch_all_data(self, store: MetricStore, now: Optional[dt.datetime] = None) -> MetricStore:
        """
        Fetch every metric kind concurrently and replace it in the store.

        A kind whose fetch fails keeps its previous samples. The store is
        returned unchanged when the source is unavailable.

        Args:
            store: The store to update.
            now: Reference instant for the fetched window. Defaults to the
                 current local time.

        Returns:
            The updated store.
        """
        if not self.source.is_available():
            logger.warning(f"{type(self.source).__name__} is not available, keeping current metrics")
            return store

        now = now or local_now()
        start, end = window_start(self.lookback_days, now), now.date()
        kinds = list(MetricKind)
        logger.info(f"Fetching {len(kinds)} metrics from {start} to {end}")

        results = await asyncio.gather(
            *(self.source.fetch(kind, start, end) for kind in kinds), return_exceptions=True
        )

        for kind, result in zip(kinds, results):
            if isinstance(result, BaseException):
                logger.opt(exception=result).error(f"Failed to fetch {kind.value}, keeping previous samples")
                continue
            store.replace(kind, result)

        logger.info(f"Metrics fetch finished: {store!r}")
        return store
