"""Formatter manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from inspec_report.config import ReportConfig
from inspec_report.pipeline import OutcomeConsumer


@dataclass(frozen=True, kw_only=True)
class FormatterManifest:
    """Manifest describing a formatter plugin.

    The manifest holds the factory building the formatter for an output
    stream, so formatters are only imported once selected by key.
    """

    description: str
    formatter_factory: Callable[[TextIO, ReportConfig], OutcomeConsumer]
