"""
Synthetic health data for demos and development.

Each metric has a fixed 30-day series; the first value belongs to the
current day and each following value to one day earlier.
"""

import datetime as dt
from typing import Callable, Optional

from health_ai.health.aggregator import local_now
from health_ai.health.models import HealthSample, MetricKind
from health_ai.health.sources.base import HealthDataSource

MOCK_VALUES: dict[MetricKind, list[float]] = {
    MetricKind.STEPS: [
        9263, 10485, 8900, 9383, 4065, 9555, 8226, 11744, 3926, 3278,
        9078, 3575, 6568, 11571, 5581, 4616, 9122, 3629, 6265, 4633,
        11326, 10217, 5432, 7302, 8258, 11468, 5070, 9743, 3303, 9451,
    ],
    MetricKind.HEART_RATE: [
        66, 72, 72, 73, 84, 83, 72, 81, 70, 77,
        67, 66, 66, 67, 78, 88, 77, 76, 78, 79,
        72, 87, 85, 84, 77, 73, 63, 63, 82, 77,
    ],
    MetricKind.ENERGY_BURNED: [
        191, 389, 250, 363, 387, 334, 175, 307, 293, 287,
        314, 370, 352, 230, 186, 180, 324, 306, 212, 204,
        172, 250, 331, 252, 315, 213, 250, 397, 155, 309,
    ],
    MetricKind.EXERCISE_TIME: [
        41, 16, 34, 38, 11, 24, 49, 35, 59, 32,
        35, 49, 48, 53, 29, 16, 15, 54, 26, 17,
        19, 57, 12, 31, 57, 43, 50, 29, 57, 41,
    ],
    MetricKind.SLEEP_DURATION: [
        7.2, 7.2, 6.2, 6.0, 8.4, 8.0, 6.4, 7.5, 8.4, 5.8,
        7.1, 5.7, 5.5, 7.7, 6.7, 8.0, 5.6, 8.0, 5.7, 8.4,
        6.3, 8.1, 8.1, 7.0, 8.1, 5.5, 5.5, 6.8, 7.9, 5.8,
    ],
}


def generate_mock(kind: MetricKind, values: list[float], now: dt.datetime) -> list[HealthSample]:
    """Map values to days counting back from ``now`` and return them oldest first."""
    samples = [
        HealthSample(kind=kind, value=value, date=now - dt.timedelta(days=index), unit=kind.unit)
        for index, value in enumerate(values)
    ]
    return list(reversed(samples))


class MockHealthSource(HealthDataSource):
    """
    Serves the fixed demo series regardless of the requested date range.

    The series is anchored to midnight of the clock's current day, so repeated
    fetches on the same day produce identical samples.

    Args:
        clock: Returns the current instant. Defaults to the local time.
    """

    def __init__(self, clock: Optional[Callable[[], dt.datetime]] = None):
        self.clock = clock or local_now

    async def fetch(self, kind: MetricKind, start: dt.date, end: dt.date) -> list[HealthSample]:
        anchor = self.clock().replace(hour=0, minute=0, second=0, microsecond=0)
        return generate_mock(kind, MOCK_VALUES[kind], anchor)
