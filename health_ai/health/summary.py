"""
Text renderings of aggregated health data.

These strings are shown to the user as-is and are also embedded in the
prompts sent to the LLM, so they must stay deterministic for a given store.
"""

import datetime as dt
from typing import Optional

from health_ai.health.aggregator import DEFAULT_RANGE_DAYS, chart_data
from health_ai.health.metric_store import MetricStore
from health_ai.health.models import HealthSample, MetricKind

STATUS_LINE_TEMPLATE = (
    "Hey! Here's where you're at: {steps} steps, heart rate: {heart_rate} bpm, "
    "{energy_burned} kcals burned, {exercise_time} mins exercised, {sleep_duration} hours slept."
)

# Windows longer than this are labelled by month and day instead of weekday
_WEEKDAY_LABEL_MAX_DAYS = 7


def summary(
    store: MetricStore,
    kind: MetricKind,
    range_days: int = DEFAULT_RANGE_DAYS,
    now: Optional[dt.datetime] = None,
) -> str:
    """
    Total and daily average of a metric over a trailing window.

    Both figures are truncated toward zero, e.g.
    ``"Total: 9263 count, Avg/Day: 1323 count"``.
    """
    values = chart_data(store, kind, range_days, now)
    total = sum(point.value for point in values)
    avg = total / len(values) if values else 0
    unit = values[0].unit if values else ""
    return f"Total: {int(total)} {unit}, Avg/Day: {int(avg)} {unit}"


def latest_sample(store: MetricStore, kind: MetricKind) -> Optional[HealthSample]:
    """
    Last sample of a kind in store order.

    Sources return samples in ascending date order, so this is the newest day.
    A store filled out of order reports whatever was appended last.
    """
    samples = store.samples(kind)
    return samples[-1] if samples else None


def latest_value(store: MetricStore, kind: MetricKind) -> int:
    sample = latest_sample(store, kind)
    return int(sample.value) if sample else 0


def latest_status_line(store: MetricStore) -> str:
    """One-sentence status of the newest value of every metric."""
    return STATUS_LINE_TEMPLATE.format(**{kind.value: latest_value(store, kind) for kind in MetricKind})


def _day_label(date: dt.datetime, range_days: int) -> str:
    if range_days <= _WEEKDAY_LABEL_MAX_DAYS:
        return date.strftime("%a")
    return f"{date:%b} {date.day}"


def format_value(value: float) -> str:
    return f"{value:.1f}" if value != int(value) else str(int(value))


def format_chart_lines(points: list[HealthSample], range_days: int) -> list[str]:
    """One ``"<day>: <value> <unit>"`` line per aggregated point."""
    return [f"{_day_label(point.date, range_days)}: {format_value(point.value)} {point.unit}" for point in points]
