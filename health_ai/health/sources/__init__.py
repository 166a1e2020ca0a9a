from health_ai.health.sources.base import HealthDataSource
from health_ai.health.sources.garmin_source import GarminHealthSource
from health_ai.health.sources.mock_source import MockHealthSource

__all__ = ["GarminHealthSource", "HealthDataSource", "MockHealthSource"]
