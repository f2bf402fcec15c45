"""Formatters writing a structured JSON document when the run closes."""

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from inspec_report.aggregator import GroupAggregator
from inspec_report.config import ReportConfig
from inspec_report.document import DocumentEmitter
from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import ProfileInfo


@dataclass(kw_only=True)
class JsonFormatter:
    """Writes the full document with outcomes grouped under their controls."""

    output: TextIO
    config: ReportConfig = field(default_factory=ReportConfig)
    aggregator: GroupAggregator = field(default_factory=GroupAggregator)

    @classmethod
    def from_config(cls, output: TextIO, config: ReportConfig) -> "JsonFormatter":
        return cls(output=output, config=config)

    def on_start(self, profiles: Sequence[ProfileInfo]) -> None:
        self.aggregator.on_start(profiles)

    def on_outcome(self, record: OutcomeRecord) -> None:
        self.aggregator.on_outcome(record)

    def on_close(self, duration: float) -> None:
        self.aggregator.on_close(duration)
        emitter = DocumentEmitter(version=self.config.version)
        json.dump(emitter.emit(self.aggregator, duration), self.output, indent=2)
        self.output.write("\n")


@dataclass(kw_only=True)
class MinimalJsonFormatter:
    """Writes every outcome as a flat list, without the profile tree."""

    output: TextIO
    config: ReportConfig = field(default_factory=ReportConfig)
    records: list[OutcomeRecord] = field(default_factory=list)

    @classmethod
    def from_config(
        cls, output: TextIO, config: ReportConfig
    ) -> "MinimalJsonFormatter":
        return cls(output=output, config=config)

    def on_start(self, profiles: Sequence[ProfileInfo]) -> None:
        pass

    def on_outcome(self, record: OutcomeRecord) -> None:
        self.records.append(record)

    def on_close(self, duration: float) -> None:
        emitter = DocumentEmitter(version=self.config.version)
        json.dump(emitter.emit_minimal(self.records, duration), self.output)
        self.output.write("\n")
