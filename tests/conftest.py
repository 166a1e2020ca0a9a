import datetime as dt

import pytest

from health_ai.health.metric_store import MetricStore
from tests import REFERENCE_NOW


@pytest.fixture
def reference_now() -> dt.datetime:
    return REFERENCE_NOW


@pytest.fixture
def empty_store() -> MetricStore:
    return MetricStore()
