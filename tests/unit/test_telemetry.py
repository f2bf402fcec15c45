"""Tests for the telemetry context."""

import pytest

from inspec_report.telemetry import DataSeries, TelemetryContext


@pytest.fixture
def telemetry() -> TelemetryContext:
    """Fresh telemetry context."""
    return TelemetryContext()


def test_add_data_series(telemetry: TelemetryContext) -> None:
    """Adding a series registers it."""
    series = DataSeries(name="/resource/File")

    assert telemetry.add_data_series(series)
    assert telemetry.list_data_series() == [series]


def test_find_or_create_returns_same_series(telemetry: TelemetryContext) -> None:
    """Looking a name up twice returns the same series."""
    series = telemetry.find_or_create_data_series("deprecation_group")

    assert isinstance(series, DataSeries)
    assert series.name == "deprecation_group"
    assert telemetry.find_or_create_data_series("deprecation_group") is series


def test_series_records_values_in_order(telemetry: TelemetryContext) -> None:
    """Values are kept in the order they were added."""
    series = telemetry.find_or_create_data_series("outcomes")
    series.add("passed")
    series.add("failed")

    assert series.data == ["passed", "failed"]


def test_reset(telemetry: TelemetryContext) -> None:
    """Reset drops all series."""
    telemetry.add_data_series(DataSeries(name="/resource/File"))

    telemetry.reset()

    assert len(telemetry.list_data_series()) == 0


def test_contexts_are_independent() -> None:
    """Separate contexts do not share series."""
    first = TelemetryContext()
    second = TelemetryContext()

    first.find_or_create_data_series("outcomes").add("passed")

    assert second.list_data_series() == []
