import datetime as dt

from health_ai.health.models import HealthSample, MetricKind

# Saturday afternoon, used as "now" by time-dependent tests
REFERENCE_NOW = dt.datetime(2025, 5, 10, 15, 30, tzinfo=dt.timezone.utc)


def make_sample(kind: MetricKind, value: float, days_ago: int, now: dt.datetime = REFERENCE_NOW) -> HealthSample:
    return HealthSample(kind=kind, value=value, date=now - dt.timedelta(days=days_ago), unit=kind.unit)
