#!/usr/bin/env python3
"""
Unit tests for GarminHealthSource.

These tests validate the per-metric extraction of daily values from Garmin
Connect API responses using a mocked client.
"""

import datetime as dt
from unittest.mock import MagicMock, patch

import pytest
from garminconnect import GarminConnectConnectionError, GarminConnectTooManyRequestsError

from health_ai.health.models import MetricKind
from health_ai.health.sources.garmin_source import (
    GarminHealthSource,
    extract_exercise_time,
    extract_heart_rate,
    extract_sleep_duration,
    extract_steps,
)

START = dt.date(2025, 5, 1)
END = dt.date(2025, 5, 3)


@pytest.fixture
def garmin_client():
    client = MagicMock()
    client.get_steps_data.return_value = [{"steps": 1200}, {"steps": 300}, {"steps": None}]
    client.get_heart_rates.return_value = {"heartRateValues": [[1714521600000, 60], [1714521720000, None], [1, 80]]}
    client.get_stats.return_value = {
        "activeKilocalories": 412.0,
        "moderateIntensityMinutes": 20,
        "vigorousIntensityMinutes": 12,
    }
    client.get_sleep_data.return_value = {"dailySleepDTO": {"sleepTimeSeconds": 27000}}
    return client


@pytest.fixture
def account_manager(garmin_client):
    manager = MagicMock()
    manager.is_authenticated.return_value = True
    manager.create_client.return_value = garmin_client
    return manager


@pytest.fixture
def source(account_manager):
    return GarminHealthSource(account_manager, user_id=12345)


class TestExtractors:
    def test_steps_are_summed_over_intervals(self, garmin_client):
        assert extract_steps(garmin_client, "2025-05-01") == 1500

    def test_no_step_intervals_means_no_value(self, garmin_client):
        garmin_client.get_steps_data.return_value = []

        assert extract_steps(garmin_client, "2025-05-01") is None

    def test_heart_rate_averages_non_null_readings(self, garmin_client):
        assert extract_heart_rate(garmin_client, "2025-05-01") == 70

    def test_heart_rate_without_readings(self, garmin_client):
        garmin_client.get_heart_rates.return_value = {"heartRateValues": None}

        assert extract_heart_rate(garmin_client, "2025-05-01") is None

    def test_exercise_time_adds_intensity_minutes(self, garmin_client):
        assert extract_exercise_time(garmin_client, "2025-05-01") == 32

    def test_exercise_time_without_intensity_data(self, garmin_client):
        garmin_client.get_stats.return_value = {}

        assert extract_exercise_time(garmin_client, "2025-05-01") is None

    def test_sleep_is_converted_to_hours(self, garmin_client):
        assert extract_sleep_duration(garmin_client, "2025-05-01") == 7.5

    def test_missing_sleep(self, garmin_client):
        garmin_client.get_sleep_data.return_value = {"dailySleepDTO": {"sleepTimeSeconds": None}}

        assert extract_sleep_duration(garmin_client, "2025-05-01") is None


class TestGarminHealthSource:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind, expected",
        [
            (MetricKind.STEPS, 1500),
            (MetricKind.HEART_RATE, 70),
            (MetricKind.ENERGY_BURNED, 412),
            (MetricKind.EXERCISE_TIME, 32),
            (MetricKind.SLEEP_DURATION, 7.5),
        ],
    )
    async def test_fetch_returns_one_sample_per_day(self, source, kind, expected):
        samples = await source.fetch(kind, START, END)

        assert [sample.date.date() for sample in samples] == [START, dt.date(2025, 5, 2), END]
        assert all(sample.value == expected for sample in samples)
        assert all(sample.unit == kind.unit for sample in samples)

    @pytest.mark.asyncio
    async def test_days_without_data_are_omitted(self, source, garmin_client):
        garmin_client.get_sleep_data.side_effect = [
            {"dailySleepDTO": {"sleepTimeSeconds": 25200}},
            {},
            {"dailySleepDTO": {"sleepTimeSeconds": 28800}},
        ]

        samples = await source.fetch(MetricKind.SLEEP_DURATION, START, END)

        assert [(sample.date.date(), sample.value) for sample in samples] == [(START, 7.0), (END, 8.0)]

    @pytest.mark.asyncio
    async def test_rate_limited_requests_are_retried(self, source, garmin_client):
        garmin_client.get_steps_data.side_effect = [
            GarminConnectTooManyRequestsError("Too many requests"),
            [{"steps": 900}],
        ]

        with patch("health_ai.health.sources.garmin_source.BACKOFF", 0):
            samples = await source.fetch(MetricKind.STEPS, START, START)

        assert [sample.value for sample in samples] == [900]
        assert garmin_client.get_steps_data.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self, source, garmin_client):
        garmin_client.get_steps_data.side_effect = GarminConnectTooManyRequestsError("Too many requests")

        with patch("health_ai.health.sources.garmin_source.BACKOFF", 0):
            samples = await source.fetch(MetricKind.STEPS, START, START)

        assert samples == []
        assert garmin_client.get_steps_data.call_count == 3

    @pytest.mark.asyncio
    async def test_client_is_created_once(self, source, account_manager):
        await source.fetch(MetricKind.STEPS, START, END)
        await source.fetch(MetricKind.HEART_RATE, START, END)

        account_manager.create_client.assert_called_once_with(12345)

    @pytest.mark.asyncio
    async def test_fetch_fails_without_client(self, source, account_manager):
        account_manager.create_client.return_value = None

        with pytest.raises(GarminConnectConnectionError):
            await source.fetch(MetricKind.STEPS, START, END)

    def test_availability_follows_stored_tokens(self, source, account_manager):
        assert source.is_available()

        account_manager.is_authenticated.return_value = False

        assert not source.is_available()
        account_manager.is_authenticated.assert_called_with(12345)
