"""Manifests of the bundled formatters."""

from inspec_report.formatters.json_formatter import JsonFormatter, MinimalJsonFormatter
from inspec_report.formatters.manifest import FormatterManifest
from inspec_report.printer import StreamingPrinter

cli_manifest = FormatterManifest(
    description="Streaming, severity-colored console report",
    formatter_factory=StreamingPrinter.from_config,
)

json_manifest = FormatterManifest(
    description="Full JSON document grouped by profile and control",
    formatter_factory=JsonFormatter.from_config,
)

json_min_manifest = FormatterManifest(
    description="Flat JSON list of outcomes",
    formatter_factory=MinimalJsonFormatter.from_config,
)
