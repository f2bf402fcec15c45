"""Fan a single ordered stream of outcomes out to independent consumers."""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from inspec_report.builder import build_outcome
from inspec_report.matcher import match
from inspec_report.models.outcome import OutcomeRecord, RawOutcome
from inspec_report.models.profile import ProfileInfo
from inspec_report.telemetry import TelemetryContext

log = logging.getLogger(__name__)


class OutcomeConsumer(Protocol):
    """Receives every outcome of a run, in execution order."""

    def on_start(self, profiles: Sequence[ProfileInfo]) -> None:
        """Called once with the run's profiles, before the first outcome."""

    def on_outcome(self, record: OutcomeRecord) -> None:
        """Called once per executed check."""

    def on_close(self, duration: float) -> None:
        """Called once after the last outcome."""


@dataclass(kw_only=True)
class ReportPipeline:
    """Delivers each outcome to every consumer, in registration order.

    Consumers do not share state; each sees the same records in the same
    order.
    """

    consumers: Sequence[OutcomeConsumer]
    telemetry: TelemetryContext | None = None
    profiles: list[ProfileInfo] = field(default_factory=list)
    _started_at: float | None = field(default=None, init=False, repr=False)

    def start(self, profiles: Sequence[ProfileInfo]) -> None:
        """Begin a run with the given profiles."""
        self.profiles = list(profiles)
        self._started_at = time.monotonic()
        log.info(
            "Starting report for %d profile(s): %s",
            len(self.profiles),
            ", ".join(p.name or "(unnamed)" for p in self.profiles),
        )
        for consumer in self.consumers:
            consumer.on_start(self.profiles)

    def publish(self, raw: RawOutcome) -> OutcomeRecord:
        """Normalize one execution event and hand it to every consumer."""
        record = build_outcome(raw)
        if self.telemetry is not None:
            self._record_telemetry(self.telemetry, record)
        for consumer in self.consumers:
            consumer.on_outcome(record)
        return record

    def close(self, duration: float | None = None) -> float:
        """Finish the run; returns the duration passed to consumers."""
        if duration is None:
            started_at = self._started_at or time.monotonic()
            duration = time.monotonic() - started_at
        for consumer in self.consumers:
            consumer.on_close(duration)
        log.info("Report completed in %.2fs", duration)
        return duration

    def _record_telemetry(
        self, telemetry: TelemetryContext, record: OutcomeRecord
    ) -> None:
        telemetry.find_or_create_data_series("outcomes").add(record.status)
        if match(record, self.profiles)[1] is None:
            telemetry.find_or_create_data_series("unmatched").add(record.id)
