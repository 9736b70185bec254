"""Tests for the one-wire domain models."""

import dataclasses

import pytest

from w1temp.onewire.models import Run, Sample, SensorDescriptor


class TestSample:
    def test_temperature_in_celsius(self, timestamp):
        assert Sample(1, timestamp, 20875).temperature == 20.875
        assert Sample(1, timestamp, -10125).temperature == -10.125

    def test_row_is_time_id_value(self, timestamp):
        assert Sample(2, timestamp, 31250).as_row() == (timestamp, 2, 31250)

    def test_frozen(self, timestamp):
        sample = Sample(1, timestamp, 20875)
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample.value = 0


class TestSensorDescriptor:
    def test_str_matches_registry_format(self):
        sensor = SensorDescriptor(1, "ambiant", "10-000802775cc7")
        assert str(sensor) == "1:ambiant:10-000802775cc7"


class TestRun:
    def test_len_counts_samples_only(self, timestamp, sensors):
        run = Run(
            timestamp,
            samples=[Sample(2, timestamp, 31250)],
            skipped=[sensors[0]],
        )
        assert len(run) == 1

    def test_runs_do_not_share_lists(self, timestamp):
        first, second = Run(timestamp), Run(timestamp)
        first.samples.append(Sample(1, timestamp, 20875))
        assert second.samples == []
