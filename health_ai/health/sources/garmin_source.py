"""
Garmin Connect backed health data source.

Reads one value per day for each metric kind from the Garmin Connect API
using tokens provisioned for the configured user.
"""

import asyncio
import datetime as dt
from statistics import mean
from typing import Any, Callable, Dict, List, Optional

import dateutil.tz
from garminconnect import Garmin, GarminConnectConnectionError, GarminConnectTooManyRequestsError
from loguru import logger

from health_ai.health.models import HealthSample, MetricKind
from health_ai.health.sources.base import HealthDataSource
from health_ai.service.garmin_account_manager import GarminAccountManager

# Configuration
RETRIES = 3
BACKOFF = 5  # seconds (multiplier for retry)


def _safe_get(data_dict: Any, key_path: List[str], default: Any = None) -> Any:
    """Safely get a nested value from a dictionary."""
    temp = data_dict
    for key in key_path:
        if not isinstance(temp, dict):
            return default
        temp = temp.get(key)
    return temp if temp is not None else default


def extract_steps(client: Garmin, date: str) -> Optional[float]:
    intervals = client.get_steps_data(date)
    if not isinstance(intervals, list) or not intervals:
        return None
    return float(sum(interval.get("steps") or 0 for interval in intervals))


def extract_heart_rate(client: Garmin, date: str) -> Optional[float]:
    """Average of the day's heart rate readings."""
    readings = _safe_get(client.get_heart_rates(date), ["heartRateValues"], [])
    bpm_values = [reading[1] for reading in readings if isinstance(reading, list) and len(reading) > 1 and reading[1]]
    return float(mean(bpm_values)) if bpm_values else None


def extract_energy_burned(client: Garmin, date: str) -> Optional[float]:
    active_kcal = _safe_get(client.get_stats(date), ["activeKilocalories"])
    return float(active_kcal) if active_kcal is not None else None


def extract_exercise_time(client: Garmin, date: str) -> Optional[float]:
    stats = client.get_stats(date)
    moderate = _safe_get(stats, ["moderateIntensityMinutes"])
    vigorous = _safe_get(stats, ["vigorousIntensityMinutes"])
    if moderate is None and vigorous is None:
        return None
    return float((moderate or 0) + (vigorous or 0))


def extract_sleep_duration(client: Garmin, date: str) -> Optional[float]:
    sleep_seconds = _safe_get(client.get_sleep_data(date), ["dailySleepDTO", "sleepTimeSeconds"])
    return sleep_seconds / 3600 if sleep_seconds else None


EXTRACTORS: Dict[MetricKind, Callable[[Garmin, str], Optional[float]]] = {
    MetricKind.STEPS: extract_steps,
    MetricKind.HEART_RATE: extract_heart_rate,
    MetricKind.ENERGY_BURNED: extract_energy_burned,
    MetricKind.EXERCISE_TIME: extract_exercise_time,
    MetricKind.SLEEP_DURATION: extract_sleep_duration,
}


class GarminHealthSource(HealthDataSource):
    """Fetches daily metrics for one user from Garmin Connect."""

    def __init__(self, account_manager: GarminAccountManager, user_id: int):
        """
        Args:
            account_manager: Provides clients built from stored tokens.
            user_id: The user whose Garmin account is read.
        """
        self.account_manager = account_manager
        self.user_id = user_id
        self._client: Optional[Garmin] = None

    def is_available(self) -> bool:
        return self.account_manager.is_authenticated(self.user_id)

    def _get_client(self) -> Garmin:
        if self._client is None:
            self._client = self.account_manager.create_client(self.user_id)
            if self._client is None:
                raise GarminConnectConnectionError(f"Could not create Garmin client for user {self.user_id}")
        return self._client

    async def _extract_with_retry(self, kind: MetricKind, client: Garmin, date: str) -> Optional[float]:
        extractor = EXTRACTORS[kind]
        for attempt in range(RETRIES):
            try:
                return await asyncio.to_thread(extractor, client, date)
            except GarminConnectTooManyRequestsError:
                sleep_seconds = BACKOFF * (attempt + 1)
                logger.warning(f"Rate limit hit – retrying {kind.value} for {date} in {sleep_seconds}s…")
                await asyncio.sleep(sleep_seconds)
        logger.error(f"Giving up on {kind.value} for {date} after {RETRIES} attempts")
        return None

    async def fetch(self, kind: MetricKind, start: dt.date, end: dt.date) -> list[HealthSample]:
        client = self._get_client()
        tz = dateutil.tz.tzlocal()

        samples = []
        for offset in range((end - start).days + 1):
            day = start + dt.timedelta(days=offset)
            value = await self._extract_with_retry(kind, client, day.isoformat())
            if value is None:
                logger.debug(f"No {kind.value} data for {day}")
                continue
            midnight = dt.datetime.combine(day, dt.time.min, tzinfo=tz)
            samples.append(HealthSample(kind=kind, value=value, date=midnight, unit=kind.unit))

        logger.info(f"Fetched {len(samples)} {kind.value} samples for user {self.user_id} from {start} to {end}")
        return samples
