"""Report formatters."""

from inspec_report.formatters.json_formatter import JsonFormatter, MinimalJsonFormatter
from inspec_report.formatters.manifests import (
    cli_manifest,
    json_manifest,
    json_min_manifest,
)

__all__ = [
    "JsonFormatter",
    "MinimalJsonFormatter",
    "cli_manifest",
    "json_manifest",
    "json_min_manifest",
]
