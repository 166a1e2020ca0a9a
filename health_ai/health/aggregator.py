"""
Daily aggregation of stored samples.

Turns the unordered samples of one metric kind into a gap-free daily series
covering a trailing window of days that ends on the reference day.
"""

import datetime as dt
from typing import Optional

import dateutil.tz

from health_ai.health.metric_store import MetricStore
from health_ai.health.models import HealthSample, InvalidWindowError, MetricKind

DEFAULT_RANGE_DAYS = 7


def local_now() -> dt.datetime:
    return dt.datetime.now(dateutil.tz.tzlocal())


def day_of(timestamp: dt.datetime, reference: dt.datetime) -> dt.date:
    """
    Calendar day of a timestamp, as seen from the reference instant's timezone.

    Naive timestamps are taken as already local.
    """
    if timestamp.tzinfo is not None and reference.tzinfo is not None:
        timestamp = timestamp.astimezone(reference.tzinfo)
    return timestamp.date()


def window_start(range_days: int, now: dt.datetime) -> dt.date:
    """First (inclusive) day of a window of ``range_days`` days ending on ``now``'s day."""
    if range_days < 1:
        raise InvalidWindowError(range_days)
    return now.date() - dt.timedelta(days=range_days - 1)


def chart_data(
    store: MetricStore,
    kind: MetricKind,
    range_days: int = DEFAULT_RANGE_DAYS,
    now: Optional[dt.datetime] = None,
) -> list[HealthSample]:
    """
    Build a daily series of exactly ``range_days`` points for a metric.

    Args:
        store: Samples to aggregate.
        kind: Metric kind to chart.
        range_days: Number of trailing days, including the reference day.
        now: Reference instant. Defaults to the current local time.

    Returns:
        One sample per day in ascending date order. Days without data get a
        zero-valued sample with the kind's canonical unit. When several samples
        fall on the same day, the first one in store order is used.

    Raises:
        InvalidWindowError: If ``range_days`` is less than 1.
    """
    now = now or local_now()
    start = window_start(range_days, now)

    by_day: dict[dt.date, HealthSample] = {}
    for sample in store.samples(kind):
        by_day.setdefault(day_of(sample.date, now), sample)

    result = []
    for offset in range(range_days):
        day = start + dt.timedelta(days=offset)
        entry = by_day.get(day)
        if entry is None:
            midnight = dt.datetime.combine(day, dt.time.min, tzinfo=now.tzinfo)
            entry = HealthSample.zero(kind, midnight)
        result.append(entry)

    return result
