import pytest
from pydantic import ValidationError

from health_ai.health.models import HealthSample, MetricKind
from tests import REFERENCE_NOW, make_sample


class TestMetricKind:
    @pytest.mark.parametrize(
        "kind, unit",
        [
            (MetricKind.STEPS, "count"),
            (MetricKind.HEART_RATE, "count/min"),
            (MetricKind.ENERGY_BURNED, "kcal"),
            (MetricKind.EXERCISE_TIME, "min"),
            (MetricKind.SLEEP_DURATION, "hr"),
        ],
    )
    def test_canonical_units(self, kind, unit):
        assert kind.unit == unit

    def test_every_kind_has_a_label(self):
        assert [kind.label for kind in MetricKind] == ["Steps", "Heartrate", "Energy", "Exercise", "Sleep"]

    @pytest.mark.parametrize("name", ["heart_rate", "heartRate", "Heartrate", "HEART-RATE", " heart_rate "])
    def test_parse_accepts_common_spellings(self, name):
        assert MetricKind.parse(name) == MetricKind.HEART_RATE

    def test_parse_accepts_short_labels(self):
        assert MetricKind.parse("energy") == MetricKind.ENERGY_BURNED
        assert MetricKind.parse("sleep") == MetricKind.SLEEP_DURATION

    def test_parse_rejects_unknown_names(self):
        with pytest.raises(ValueError, match="Unknown metric 'weight'"):
            MetricKind.parse("weight")


class TestHealthSample:
    def test_samples_are_immutable(self):
        sample = make_sample(MetricKind.STEPS, 1000, days_ago=0)

        with pytest.raises(ValidationError):
            sample.value = 2000

    def test_zero_sample_uses_canonical_unit(self):
        sample = HealthSample.zero(MetricKind.EXERCISE_TIME, REFERENCE_NOW)

        assert sample.value == 0
        assert sample.unit == "min"
        assert sample.date == REFERENCE_NOW

    def test_value_is_coerced_to_float(self):
        sample = make_sample(MetricKind.STEPS, 1000, days_ago=0)

        assert isinstance(sample.value, float)
