"""CLI entry point for rendering test outcome reports."""

import argparse
import json
import logging
import sys
from collections.abc import Iterable, Sequence
from contextlib import nullcontext
from pathlib import Path

from pydantic import ValidationError

from inspec_report.config import ReportConfig
from inspec_report.event_loader import read_events
from inspec_report.formatters.loading import (
    FormatterNotFoundError,
    InvalidFormatterError,
    describe_formatters,
    load_formatter_manifest,
)
from inspec_report.metadata_loader import MetadataLoadError, load_profiles
from inspec_report.models.outcome import RawOutcome
from inspec_report.models.profile import ProfileInfo
from inspec_report.pipeline import OutcomeConsumer, ReportPipeline
from inspec_report.telemetry import TelemetryContext

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_USAGE = 2


def render(
    formatter: OutcomeConsumer,
    profiles: Sequence[ProfileInfo],
    events: Iterable[RawOutcome],
    telemetry: TelemetryContext | None = None,
) -> int:
    """Feed events through a formatter and return exit code."""
    pipeline = ReportPipeline(consumers=[formatter], telemetry=telemetry)
    pipeline.start(profiles)
    has_failures = False
    for event in events:
        record = pipeline.publish(event)
        has_failures = has_failures or record.status == "failed"
    pipeline.close()

    return EXIT_FAILURES if has_failures else EXIT_OK


def run(
    formatter_key: str,
    profiles_path: Path | None,
    events_path: Path,
    output_path: Path | None = None,
    config_json: str = "{}",
) -> int:
    """Render the report for an events file and return exit code."""
    log = logging.getLogger("inspec_report")

    try:
        manifest = load_formatter_manifest(formatter_key)
    except (FormatterNotFoundError, InvalidFormatterError) as e:
        log.error("%s", e)
        return EXIT_USAGE

    try:
        config = ReportConfig(**json.loads(config_json))
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        log.error("Invalid report configuration: %s", e)
        return EXIT_USAGE

    try:
        profiles = load_profiles(profiles_path) if profiles_path else []
    except (FileNotFoundError, MetadataLoadError) as e:
        log.error("Cannot load profile metadata: %s", e)
        return EXIT_USAGE

    if not events_path.is_file():
        log.error("Events file not found: %s", events_path)
        return EXIT_USAGE

    log.info("Rendering %s report for %s", formatter_key, events_path)
    telemetry = TelemetryContext()
    with (
        events_path.open() as events_file,
        output_path.open("w") if output_path else nullcontext(sys.stdout) as output,
    ):
        formatter = manifest.formatter_factory(output, config)
        exit_code = render(formatter, profiles, read_events(events_file), telemetry)

    unmatched = telemetry.find_or_create_data_series("unmatched")
    if unmatched.data:
        log.info("%d outcome(s) did not match any control", len(unmatched.data))

    return exit_code


def main() -> None:
    """CLI entry point."""
    formatters = describe_formatters()
    parser = argparse.ArgumentParser(
        description="Render test outcomes as a console or JSON report",
        epilog="formatters:\n"
        + "\n".join(f"  {key:<10} {text}" for key, text in formatters.items()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--events",
        type=Path,
        required=True,
        help="JSON-lines file with one execution event per line",
    )
    parser.add_argument(
        "--profiles",
        type=Path,
        default=None,
        help="YAML file with profile and control metadata",
    )
    parser.add_argument(
        "--format",
        default="cli",
        help=f"Formatter key ({', '.join(formatters)})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--config",
        default="{}",
        help="JSON configuration for the report",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = run(
        formatter_key=args.format,
        profiles_path=args.profiles,
        events_path=args.events,
        output_path=args.output,
        config_json=args.config,
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
