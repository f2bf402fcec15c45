"""Named telemetry data series, held by an explicitly passed context."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(kw_only=True)
class DataSeries:
    """Ordered values recorded under a name."""

    name: str
    data: list[Any] = field(default_factory=list)

    def add(self, value: Any) -> None:
        """Record a value."""
        self.data.append(value)


@dataclass(kw_only=True)
class TelemetryContext:
    """Process-scoped registry of data series.

    Create one per run and pass it to whatever records telemetry.
    """

    _series: dict[str, DataSeries] = field(default_factory=dict)

    def add_data_series(self, series: DataSeries) -> bool:
        """Register a series, replacing any series with the same name."""
        self._series[series.name] = series
        return True

    def list_data_series(self) -> Sequence[DataSeries]:
        """Return the registered series in registration order."""
        return list(self._series.values())

    def find_or_create_data_series(self, name: str) -> DataSeries:
        """Return the series with the given name, creating it when missing."""
        if name not in self._series:
            self._series[name] = DataSeries(name=name)
        return self._series[name]

    def reset(self) -> None:
        """Drop every registered series."""
        self._series.clear()
