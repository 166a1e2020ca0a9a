"""
Data models for the health metrics core.

This module provides:
- The closed set of tracked metric kinds with their canonical units
- The immutable daily sample model
- The error raised for malformed aggregation windows
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class InvalidWindowError(ValueError):
    """Raised when an aggregation window is not a positive number of days."""

    def __init__(self, range_days: int):
        super().__init__(f"Window must span at least one day, got {range_days}")
        self.range_days = range_days


class MetricKind(str, Enum):
    """Tracked health measures."""

    STEPS = "steps"
    HEART_RATE = "heart_rate"
    ENERGY_BURNED = "energy_burned"
    EXERCISE_TIME = "exercise_time"
    SLEEP_DURATION = "sleep_duration"

    @property
    def unit(self) -> str:
        """Canonical unit label used for display and zero-filled days."""
        return _UNITS[self]

    @property
    def label(self) -> str:
        """Short human-readable label."""
        return _LABELS[self]

    @classmethod
    def parse(cls, name: str) -> "MetricKind":
        """
        Resolve a user-supplied metric name.

        Accepts enum values (``heart_rate``), short labels (``Heartrate``) and
        camel case (``heartRate``), case-insensitively.

        Raises:
            ValueError: If the name matches no metric kind.
        """
        normalized = name.strip().lower().replace("_", "").replace("-", "")
        for kind in cls:
            if normalized in (kind.value.replace("_", ""), kind.label.lower()):
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown metric '{name}'. Valid metrics: {valid}")


_UNITS = {
    MetricKind.STEPS: "count",
    MetricKind.HEART_RATE: "count/min",
    MetricKind.ENERGY_BURNED: "kcal",
    MetricKind.EXERCISE_TIME: "min",
    MetricKind.SLEEP_DURATION: "hr",
}

_LABELS = {
    MetricKind.STEPS: "Steps",
    MetricKind.HEART_RATE: "Heartrate",
    MetricKind.ENERGY_BURNED: "Energy",
    MetricKind.EXERCISE_TIME: "Exercise",
    MetricKind.SLEEP_DURATION: "Sleep",
}


class HealthSample(BaseModel):
    """A single observation of one metric on one day."""

    model_config = ConfigDict(frozen=True)

    kind: MetricKind
    value: float
    date: datetime  # Only the calendar day is meaningful
    unit: str

    @classmethod
    def zero(cls, kind: MetricKind, date: datetime) -> "HealthSample":
        """Placeholder for a day without data."""
        return cls(kind=kind, value=0.0, date=date, unit=kind.unit)
